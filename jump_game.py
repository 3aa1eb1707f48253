"""
Bird Jump

Flappy-Bird-like arcade game on top of jump_engine.GameEngine:
- SPACE, a mouse click or a tap anywhere in the window makes the bird jump
- The first jump starts the game
- After a crash, click Restart (or press R) to play again, Q quits

Run:
1) Install pygame if needed: pip install pygame
2) python jump_game.py
"""

import logging
import sys

import pygame

from jump_engine import GameConfig, GameEngine, RunState, HORIZONTAL_TIMER, VERTICAL_TIMER

logger = logging.getLogger(__name__)

# -----------------------------
# CONFIGURATION / CONSTANTS
# -----------------------------
FPS = 60  # render rate only, the engine ticks on its own timers

# Visuals
SKY_TOP = (31, 41, 55)
SKY_BOTTOM = (17, 24, 39)
PIPE_COLOR = (22, 163, 74)
PIPE_RIM = (52, 193, 104)
BIRD_COLOR = (255, 215, 64)
EXPLOSION_COLORS = [(255, 80, 40), (255, 160, 40), (255, 230, 120)]
TEXT_COLOR = (255, 255, 255)
BUTTON_COLOR = (59, 130, 246)
BUTTON_HOVER = (29, 78, 216)
BUTTON_SIZE = (140, 44)


# -----------------------------
# HELPER FUNCTIONS
# -----------------------------

def draw_text(surf, text, size, pos, color=TEXT_COLOR, center=False):
    """Convenience to draw text on a surface."""
    font = pygame.font.SysFont(None, size)
    surf_t = font.render(text, True, color)
    rect = surf_t.get_rect()
    if center:
        rect.center = pos
    else:
        rect.topleft = pos
    surf.blit(surf_t, rect)


# -----------------------------
# TIMERS
# -----------------------------

class PygameScheduler:
    """Engine timers backed by pygame.time.set_timer.

    Each named timer gets its own custom event type; the game loop hands
    those events to dispatch(), so ticks and input share the event queue.
    """

    def __init__(self, names=(VERTICAL_TIMER, HORIZONTAL_TIMER)):
        self.event_types = {name: pygame.event.custom_type() for name in names}
        self._callbacks = {}

    def start(self, name, period_ms, callback):
        if name in self._callbacks:
            return
        self._callbacks[name] = callback
        pygame.time.set_timer(self.event_types[name], period_ms)

    def cancel(self, name):
        if self._callbacks.pop(name, None) is not None:
            pygame.time.set_timer(self.event_types[name], 0)

    def is_active(self, name):
        return name in self._callbacks

    def dispatch(self, event):
        """Run the callback for a timer event. Returns True if the event was a tick."""
        for name, event_type in self.event_types.items():
            if event.type == event_type:
                callback = self._callbacks.get(name)
                # a tick may already be queued when its timer is cancelled
                if callback is not None:
                    callback()
                return True
        return False


# -----------------------------
# MAIN GAME CLASS
# -----------------------------

class Game:
    """Window, input wiring and rendering around a GameEngine."""

    def __init__(self, config=None, rng=None):
        pygame.init()
        self.config = config or GameConfig()
        self.screen = pygame.display.set_mode((self.config.arena_width, self.config.arena_height))
        pygame.display.set_caption("Bird Jump")
        self.clock = pygame.time.Clock()

        self.scheduler = PygameScheduler()
        self.engine = GameEngine(self.scheduler, self.config, rng=rng)
        self.engine.add_game_over_listener(self.on_game_over)

        # Restart button sits centered under the Game Over title
        self.restart_button = pygame.Rect((0, 0), BUTTON_SIZE)
        self.restart_button.center = (self.config.arena_width // 2, self.config.arena_height // 3 + 70)
        self.running = True

    def on_game_over(self, marker):
        logger.info("Game over with score %d", self.engine.score)

    # -----------------------------
    # INPUT
    # -----------------------------
    def restart_enabled(self):
        return self.engine.run_state is RunState.GAME_OVER

    def handle_event(self, event):
        """Translate one pygame event into engine actions."""
        if self.scheduler.dispatch(event):
            return
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self.engine.jump()
            elif event.key == pygame.K_r and self.restart_enabled():
                self.engine.restart()
            elif event.key == pygame.K_q:
                self.running = False
        elif event.type == pygame.MOUSEBUTTONDOWN:
            # SDL follows every FINGERDOWN with a synthesized mouse click
            if getattr(event, "touch", False):
                return
            if self.restart_enabled() and self.restart_button.collidepoint(event.pos):
                # the restart click must not also count as a jump
                self.engine.restart()
            else:
                self.engine.jump()
        elif event.type == pygame.FINGERDOWN:
            # finger coordinates are normalized to [0, 1]
            pos = (event.x * self.config.arena_width, event.y * self.config.arena_height)
            if self.restart_enabled() and self.restart_button.collidepoint(pos):
                self.engine.restart()
            else:
                self.engine.jump()

    def handle_input(self):
        """Process the pygame event queue: timer ticks and player input, one at a time."""
        for event in pygame.event.get():
            self.handle_event(event)

    # -----------------------------
    # DRAW
    # -----------------------------
    def draw_background(self):
        """Vertical gradient behind the play area."""
        height = self.config.arena_height
        for i in range(height):
            u = i / height
            color = tuple(int(a * (1 - u) + b * u) for a, b in zip(SKY_TOP, SKY_BOTTOM))
            pygame.draw.line(self.screen, color, (0, i), (self.config.arena_width, i))

    def draw_obstacle(self, view):
        """Top and bottom pipe with a lighter rim at the gap edges."""
        x = int(view["horizontal_position"])
        width = view["obstacle_width"]
        gap_top = int(view["gap_top"])
        gap_bottom = gap_top + view["gap_size"]
        top_rect = pygame.Rect(x, 0, width, gap_top)
        bottom_rect = pygame.Rect(x, gap_bottom, width, view["arena_height"] - gap_bottom)
        pygame.draw.rect(self.screen, PIPE_COLOR, top_rect, border_bottom_left_radius=8, border_bottom_right_radius=8)
        pygame.draw.rect(self.screen, PIPE_COLOR, bottom_rect, border_top_left_radius=8, border_top_right_radius=8)
        rim_w = 6
        pygame.draw.rect(self.screen, PIPE_RIM, (x, gap_top - rim_w, width, rim_w))
        pygame.draw.rect(self.screen, PIPE_RIM, (x, gap_bottom, width, rim_w))

    def draw_bird(self, view):
        size = view["actor_size"]
        rect = pygame.Rect(view["actor_left"], int(view["vertical_position"]), size, size)
        pygame.draw.ellipse(self.screen, BIRD_COLOR, rect)
        pygame.draw.ellipse(self.screen, (10, 10, 10), rect, 2)
        # eye
        eye = (rect.left + int(size * 0.68), rect.top + int(size * 0.32))
        pygame.draw.circle(self.screen, (255, 255, 255), eye, max(2, size // 8))
        pygame.draw.circle(self.screen, (10, 10, 10), eye, max(1, size // 16))

    def draw_explosion(self, view):
        """Concentric burst of explosion_size pixels at the collision marker."""
        marker = view["explosion_marker"]
        size = view["explosion_size"]
        center = (int(marker.left + size / 2), int(marker.top + size / 2))
        for i, color in enumerate(EXPLOSION_COLORS):
            pygame.draw.circle(self.screen, color, center, size // 2 - i * (size // 7))

    def draw_game_over(self):
        overlay = pygame.Surface((self.config.arena_width, self.config.arena_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        self.screen.blit(overlay, (0, 0))
        draw_text(self.screen, "Game Over", 56, (self.config.arena_width // 2, self.config.arena_height // 3),
                  center=True)
        hover = self.restart_button.collidepoint(pygame.mouse.get_pos())
        pygame.draw.rect(self.screen, BUTTON_HOVER if hover else BUTTON_COLOR, self.restart_button, border_radius=6)
        draw_text(self.screen, "Restart", 30, self.restart_button.center, center=True)

    def draw(self):
        """Draw one frame from the engine's current view data."""
        view = self.engine.get_view_data()
        self.draw_background()
        self.draw_obstacle(view)
        if view["run_state"] is RunState.GAME_OVER:
            self.draw_explosion(view)
        else:
            self.draw_bird(view)
        draw_text(self.screen, f"Score: {view['score']}", 36, (8, 8))
        if view["run_state"] is RunState.NOT_STARTED:
            draw_text(self.screen, "Press SPACE or click to jump", 26,
                      (self.config.arena_width // 2, self.config.arena_height - 40), center=True)
        elif view["run_state"] is RunState.GAME_OVER:
            self.draw_game_over()
        pygame.display.flip()

    # -----------------------------
    # RUN / QUIT
    # -----------------------------
    def run(self):
        """Main loop: drain events (ticks + input), then render."""
        while self.running:
            self.clock.tick(FPS)
            self.handle_input()
            self.draw()
        self.quit()

    def quit(self):
        self.engine.restart()  # cancels both pygame timers
        pygame.quit()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    Game().run()
    sys.exit()


# -----------------------------
# ENTRY POINT
# -----------------------------

if __name__ == "__main__":
    main()
