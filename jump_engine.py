"""
Bird Jump engine

The simulation core of the game, with no pygame dependency:
- An actor that falls under constant gravity and jumps on input
- A single gapped obstacle that scrolls left and recycles with a new gap
- Two independent periodic ticks (vertical fall, horizontal scroll)
- Collision check after every position change, score per recycled obstacle

The front end in jump_game.py reads get_view_data() every frame and calls
jump() / restart() from its input handlers.
"""

import enum
import logging
import random
from collections import namedtuple
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# -----------------------------
# CONFIGURATION / CONSTANTS
# -----------------------------
ARENA_WIDTH, ARENA_HEIGHT = 400, 600  # play area size in pixels

# Actor
ACTOR_SIZE = 60
ACTOR_LEFT = 100  # where the renderer draws the actor
ACTOR_START_Y = 300
GRAVITY = 6  # pixels per vertical tick
JUMP_IMPULSE = 70  # pixels per jump

# Obstacle
OBSTACLE_WIDTH = 60
GAP_SIZE = 200
OBSTACLE_START_X = 500
GAP_START_TOP = 200
SCROLL_STEP = 5  # pixels per horizontal tick

# Timers (milliseconds)
VERTICAL_PERIOD_MS = 24
HORIZONTAL_PERIOD_MS = 24

# Explosion shown at the collision point
EXPLOSION_OFFSET = 20
EXPLOSION_SIZE = 80

VERTICAL_TIMER = "vertical"
HORIZONTAL_TIMER = "horizontal"


class RunState(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


ExplosionMarker = namedtuple("ExplosionMarker", ["top", "left"])


@dataclass(frozen=True)
class GameConfig:
    """Every tunable constant of a game. Defaults match the module constants."""

    arena_width: int = ARENA_WIDTH
    arena_height: int = ARENA_HEIGHT
    actor_size: int = ACTOR_SIZE
    actor_left: int = ACTOR_LEFT
    initial_vertical_position: float = ACTOR_START_Y
    gravity: float = GRAVITY
    jump_impulse: float = JUMP_IMPULSE
    obstacle_width: int = OBSTACLE_WIDTH
    gap_size: int = GAP_SIZE
    initial_horizontal_position: float = OBSTACLE_START_X
    initial_gap_top: float = GAP_START_TOP
    scroll_step: float = SCROLL_STEP
    vertical_period_ms: int = VERTICAL_PERIOD_MS
    horizontal_period_ms: int = HORIZONTAL_PERIOD_MS
    explosion_offset: float = EXPLOSION_OFFSET
    explosion_size: int = EXPLOSION_SIZE

    def __post_init__(self):
        for name in ("arena_width", "arena_height", "actor_size", "obstacle_width", "gap_size",
                     "gravity", "jump_impulse", "scroll_step",
                     "vertical_period_ms", "horizontal_period_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.gap_size >= self.arena_height:
            raise ValueError("gap_size must be smaller than arena_height")
        if self.actor_size > self.arena_height:
            raise ValueError("actor_size must fit inside arena_height")
        if not 0 <= self.initial_vertical_position <= self.floor:
            raise ValueError(f"initial_vertical_position must lie in [0, {self.floor}]")
        if not 0 <= self.initial_gap_top < self.arena_height - self.gap_size:
            raise ValueError(f"initial_gap_top must lie in [0, {self.arena_height - self.gap_size})")

    @property
    def floor(self):
        """Lowest vertical position the actor may occupy."""
        return self.arena_height - self.actor_size


# -----------------------------
# TICK SCHEDULERS
# -----------------------------

class ManualScheduler:
    """Periodic timers driven by a virtual millisecond clock.

    Nothing fires until advance() is called, which makes runs reproducible.
    Used headless and by the tests; the pygame front end has its own
    scheduler with the same start / cancel / is_active methods.
    """

    def __init__(self):
        self.now = 0
        # name -> [next_due, period, callback]
        self._timers = {}

    def start(self, name, period_ms, callback):
        """Arm a periodic timer. Starting an armed timer leaves it untouched."""
        if name in self._timers:
            return
        self._timers[name] = [self.now + period_ms, period_ms, callback]

    def cancel(self, name):
        self._timers.pop(name, None)

    def is_active(self, name):
        return name in self._timers

    def advance(self, ms):
        """Move the clock forward, firing every due callback in time order."""
        target = self.now + ms
        while True:
            due = [(timer[0], order, name) for order, (name, timer) in enumerate(self._timers.items())
                   if timer[0] <= target]
            if not due:
                break
            when, _, name = min(due)
            timer = self._timers[name]
            self.now = when
            timer[0] += timer[1]
            timer[2]()
        self.now = target


# -----------------------------
# GAME ENGINE
# -----------------------------

class GameEngine:
    """Owns the actor, the obstacle, the score and the run state.

    All mutation goes through tick_vertical(), tick_horizontal(), jump() and
    restart(); each position change is followed by evaluate_collision().
    """

    def __init__(self, scheduler, config=None, rng=None):
        self.config = config or GameConfig()
        self.scheduler = scheduler
        # anything with randrange(); random.Random(seed) in tests
        self.rng = rng or random.Random()
        self._listeners = []
        self._reset_state()

    def _reset_state(self):
        cfg = self.config
        self.vertical_position = float(cfg.initial_vertical_position)
        self.horizontal_position = float(cfg.initial_horizontal_position)
        self.gap_top = cfg.initial_gap_top
        self.score = 0
        self._started = False
        # present only while the game is over
        self._explosion = None

    # -----------------------------
    # STATE
    # -----------------------------
    @property
    def run_state(self):
        if self._explosion is not None:
            return RunState.GAME_OVER
        if self._started:
            return RunState.RUNNING
        return RunState.NOT_STARTED

    @property
    def explosion_marker(self):
        """Collision coordinates, or None unless the game is over."""
        return self._explosion

    def add_game_over_listener(self, callback):
        """Register callback(marker), called once per transition to GAME_OVER."""
        self._listeners.append(callback)

    def get_view_data(self):
        """Return everything the renderer needs for one frame."""
        cfg = self.config
        return {
            "vertical_position": self.vertical_position,
            "horizontal_position": self.horizontal_position,
            "gap_top": self.gap_top,
            "score": self.score,
            "run_state": self.run_state,
            "explosion_marker": self._explosion,
            "arena_width": cfg.arena_width,
            "arena_height": cfg.arena_height,
            "actor_size": cfg.actor_size,
            "actor_left": cfg.actor_left,
            "obstacle_width": cfg.obstacle_width,
            "gap_size": cfg.gap_size,
            "explosion_size": cfg.explosion_size,
        }

    # -----------------------------
    # TIMERS
    # -----------------------------
    def _start_vertical_timer(self):
        if self.vertical_position < self.config.floor:
            self.scheduler.start(VERTICAL_TIMER, self.config.vertical_period_ms, self.tick_vertical)

    def _start_horizontal_timer(self):
        self.scheduler.start(HORIZONTAL_TIMER, self.config.horizontal_period_ms, self.tick_horizontal)

    def _stop_timers(self):
        self.scheduler.cancel(VERTICAL_TIMER)
        self.scheduler.cancel(HORIZONTAL_TIMER)

    # -----------------------------
    # TICKS
    # -----------------------------
    def tick_vertical(self):
        """Apply one step of gravity. The timer stops once the actor rests on the floor."""
        if self.run_state is not RunState.RUNNING:
            return
        floor = self.config.floor
        self.vertical_position = min(self.vertical_position + self.config.gravity, floor)
        if self.vertical_position >= floor:
            self.scheduler.cancel(VERTICAL_TIMER)
        self.evaluate_collision()

    def tick_horizontal(self):
        """Scroll the obstacle one step left, recycling it past the left edge."""
        if self.run_state is not RunState.RUNNING:
            return
        cfg = self.config
        self.horizontal_position -= cfg.scroll_step
        if self.horizontal_position < -cfg.obstacle_width:
            self._recycle_obstacle()
        self.evaluate_collision()

    def _recycle_obstacle(self):
        cfg = self.config
        self.horizontal_position = float(cfg.arena_width)
        self.gap_top = self.rng.randrange(0, cfg.arena_height - cfg.gap_size)
        self.score += 1
        logger.debug("obstacle recycled, gap_top=%s score=%d", self.gap_top, self.score)

    # -----------------------------
    # ACTIONS
    # -----------------------------
    def jump(self):
        """Move the actor up by the jump impulse; the first jump starts the game."""
        if self.run_state is RunState.GAME_OVER:
            return
        if not self._started:
            self._started = True
            self._start_horizontal_timer()
            logger.debug("game started")
        self.vertical_position = max(0.0, self.vertical_position - self.config.jump_impulse)
        # resumes gravity if the actor was resting on the floor
        self._start_vertical_timer()
        self.evaluate_collision()

    def restart(self):
        """Reset to the initial state from any run state."""
        self._stop_timers()
        self._reset_state()
        logger.debug("game restarted")

    # -----------------------------
    # COLLISION
    # -----------------------------
    def collides(self):
        """True when the obstacle overlaps the actor's slot and the actor is outside the gap."""
        cfg = self.config
        if not 0 <= self.horizontal_position <= cfg.obstacle_width:
            return False
        gap_bottom = self.gap_top + cfg.gap_size
        return (self.vertical_position < self.gap_top
                or self.vertical_position + cfg.actor_size > gap_bottom)

    def evaluate_collision(self):
        """Check for a collision and end the game if there is one.

        Returns the result of collides(). The transition to GAME_OVER cancels
        both timers and captures the explosion marker at the current positions.
        """
        hit = self.collides()
        if hit and self._explosion is None:
            self._stop_timers()
            self._started = False
            self._explosion = ExplosionMarker(
                top=self.vertical_position,
                left=self.horizontal_position - self.config.explosion_offset,
            )
            logger.debug("game over at %s, score=%d", self._explosion, self.score)
            for callback in list(self._listeners):
                callback(self._explosion)
        return hit
