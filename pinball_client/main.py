# pinball_client/main.py
import os
import sys
import pygame

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from pinball_shared.constants import APP_TITLE, WIDTH, HEIGHT, FPS
from pinball_shared.scorestore import HighScoreStore, DEFAULT_STORE_FILE
from pinball_client.game_world import GameWorld
from pinball_client.screens import TitleScreen, GameScreen, SettingsScreen


class App:
    def __init__(self):
        pygame.init()
        pygame.display.set_caption(APP_TITLE)
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()

        # Keep scores elsewhere with:
        #   PINBALL_STORE=/tmp/scores.json python pinball_client/main.py
        store_path = os.getenv("PINBALL_STORE", str(DEFAULT_STORE_FILE))
        self.world = GameWorld(WIDTH, HEIGHT, store=HighScoreStore(store_path))

        self.screens = {
            "title": TitleScreen(self),
            "game": GameScreen(self),
            "settings": SettingsScreen(self),
        }

        self.current = None
        self.running = True
        self.change_screen("title")

    def change_screen(self, name, **kwargs):
        if self.current:
            self.current.on_exit()
        self.current = self.screens[name]
        self.current.on_enter(**kwargs)

    def handle_global_keys(self, event):
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False

    def handle_resize(self, event):
        if event.type == pygame.VIDEORESIZE:
            self.world.resize(event.w, event.h)

    def run(self):
        try:
            while self.running:
                dt = self.clock.tick(FPS) / 1000.0

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    self.handle_global_keys(event)
                    self.handle_resize(event)
                    self.current.handle_event(event)

                self.current.update(dt)
                self.current.draw(self.screen)
                pygame.display.flip()
        finally:
            pygame.quit()


def main():
    App().run()


if __name__ == "__main__":
    main()
