import pygame
from pinball_shared.constants import WHITE, BLACK, GRAY, DARK, BLUE, GREEN, ORANGE, RED
from pinball_shared.game_config import PHYSICS_LIMITS
from pinball_client.game_entities import Side
from pinball_client.ui import Button, Slider

LEFT_KEYS = (pygame.K_a, pygame.K_LEFT)
RIGHT_KEYS = (pygame.K_d, pygame.K_RIGHT)
LAUNCH_KEYS = (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER)


class Screen:
    name = "base"
    def __init__(self, app): self.app = app
    def on_enter(self, **kwargs): pass
    def on_exit(self): pass
    def handle_event(self, event): pass
    def update(self, dt): pass
    def draw(self, surface): pass


# -------------------- Title --------------------
class TitleScreen(Screen):
    name = "title"
    def __init__(self, app):
        super().__init__(app)
        self.title_font = pygame.font.SysFont(None, 64)
        self.small_font = pygame.font.SysFont(None, 26)
        self.play_btn = Button((0, 0, 240, 55), "Play", self.small_font, BLUE, WHITE)

    def handle_event(self, event):
        if self.play_btn.is_clicked(event):
            self.app.change_screen("game")
        elif event.type == pygame.KEYDOWN and event.key in LAUNCH_KEYS:
            self.app.change_screen("game")

    def draw(self, surface):
        w, h = surface.get_size()
        surface.fill(DARK)
        title = self.title_font.render("PINBALL", True, WHITE)
        surface.blit(title, title.get_rect(center=(w // 2, h // 2 - 80)))

        hs = self.small_font.render(f"High score: {self.app.world.high_score}", True, GRAY)
        surface.blit(hs, hs.get_rect(center=(w // 2, h // 2 - 20)))

        self.play_btn.rect.center = (w // 2, h // 2 + 60)
        self.play_btn.draw(surface)


# -------------------- Game --------------------
class GameScreen(Screen):
    name = "game"
    def __init__(self, app):
        super().__init__(app)
        self.font = pygame.font.SysFont(None, 24)
        self.hud_font = pygame.font.SysFont(None, 28)
        self.launch_btn = Button((0, 0, 90, 36), "Launch", self.font, GREEN, WHITE)
        self.settings_btn = Button((0, 0, 90, 36), "Settings", self.font, ORANGE, BLACK)
        # touch finger id -> side it pressed
        self.fingers = {}

    def _release_flippers(self):
        self.app.world.set_flipper_active(Side.LEFT, False)
        self.app.world.set_flipper_active(Side.RIGHT, False)

    def on_exit(self):
        self.fingers.clear()
        self._release_flippers()

    def _side_at(self, x_frac):
        return Side.LEFT if x_frac < 0.5 else Side.RIGHT

    def handle_event(self, event):
        world = self.app.world

        if event.type == pygame.KEYDOWN:
            if event.key in LEFT_KEYS:
                world.set_flipper_active(Side.LEFT, True)
            elif event.key in RIGHT_KEYS:
                world.set_flipper_active(Side.RIGHT, True)
            elif event.key in LAUNCH_KEYS:
                world.launch()
            elif event.key == pygame.K_s:
                self.app.change_screen("settings")

        elif event.type == pygame.KEYUP:
            if event.key in LEFT_KEYS:
                world.set_flipper_active(Side.LEFT, False)
            elif event.key in RIGHT_KEYS:
                world.set_flipper_active(Side.RIGHT, False)

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.launch_btn.is_clicked(event):
                world.launch()
            elif self.settings_btn.is_clicked(event):
                self.app.change_screen("settings")
            else:
                w = self.app.screen.get_width()
                world.set_flipper_active(self._side_at(event.pos[0] / max(1, w)), True)

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._release_flippers()

        elif event.type == pygame.FINGERDOWN:
            side = self._side_at(event.x)
            self.fingers[event.finger_id] = side
            world.set_flipper_active(side, True)

        elif event.type == pygame.FINGERUP:
            side = self.fingers.pop(event.finger_id, None)
            if side is not None and side not in self.fingers.values():
                world.set_flipper_active(side, False)

    def update(self, dt):
        # fixed-step simulation: one physics step per animation frame
        self.app.world.step()

    def draw_hud(self, surface):
        world = self.app.world
        items = [
            f"Score: {world.score}",
            f"High: {world.high_score}",
            f"Balls: {world.balls_remaining}",
        ]
        x = 10
        for text in items:
            img = self.hud_font.render(text, True, WHITE)
            shadow = self.hud_font.render(text, True, BLACK)
            surface.blit(shadow, (x + 1, 9))
            surface.blit(img, (x, 8))
            x += img.get_width() + 24

        w, h = surface.get_size()
        self.settings_btn.rect.topright = (w - 10, 36)
        self.settings_btn.draw(surface)
        if world.game.can_launch():
            self.launch_btn.rect.topright = (w - 10, 80)
            self.launch_btn.draw(surface)

    def draw(self, surface):
        self.app.world.draw(surface, self.font)
        self.draw_hud(surface)


# -------------------- Settings --------------------
SLIDER_LABELS = {
    "gravity": ("Gravity", "{:.2f}"),
    "bounce": ("Bounce", "{:.2f}"),
    "friction": ("Friction", "{:.3f}"),
    "flipper_power": ("Flipper power", "{:.0f}"),
    "bumper_force": ("Bumper force", "{:.0f}"),
    "sling_force": ("Slingshot force", "{:.0f}"),
    "sling_threshold": ("Slingshot threshold", "{:.1f}"),
    "speed_multiplier": ("Speed", "{:.1f}"),
}


class SettingsScreen(Screen):
    name = "settings"
    def __init__(self, app):
        super().__init__(app)
        self.title_font = pygame.font.SysFont(None, 48)
        self.small_font = pygame.font.SysFont(None, 22)
        self.sliders = []
        self.reset_btn = Button((0, 0, 150, 44), "Reset", self.small_font, RED, WHITE)
        self.back_btn = Button((0, 0, 150, 44), "Back", self.small_font, BLUE, WHITE)

    def on_enter(self, **kwargs):
        w, h = self.app.screen.get_size()
        self.sliders = []
        y = 140
        for name, (lo, hi) in PHYSICS_LIMITS.items():
            label, fmt = SLIDER_LABELS.get(name, (name, "{:.2f}"))
            self.sliders.append(Slider((w // 2 - 160, y, 320, 12), self.small_font, label, name, lo, hi, fmt))
            y += 56
        self.reset_btn.rect.topleft = (w // 2 - 160, y)
        self.back_btn.rect.topright = (w // 2 + 160, y)

    def handle_event(self, event):
        physics = self.app.world.physics
        for s in self.sliders:
            s.handle_event(event, physics)

        if self.reset_btn.is_clicked(event):
            physics.reset_to_defaults()
        elif self.back_btn.is_clicked(event):
            self.app.change_screen("game")
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_r:
                physics.reset_to_defaults()
            elif event.key == pygame.K_s:
                self.app.change_screen("game")

    def draw(self, surface):
        w, h = surface.get_size()
        surface.fill((18, 24, 36))
        title = self.title_font.render("Settings", True, WHITE)
        surface.blit(title, title.get_rect(center=(w // 2, 70)))

        for s in self.sliders:
            s.draw(surface, self.app.world.physics)
        self.reset_btn.draw(surface)
        self.back_btn.draw(surface)

        hint = self.small_font.render("R: reset   S: back", True, GRAY)
        surface.blit(hint, hint.get_rect(center=(w // 2, h - 24)))
