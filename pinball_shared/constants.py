# pinball_shared/constants.py

APP_TITLE = "Pinball"
WIDTH, HEIGHT = 500, 800
FPS = 60
FRAME_DT = 1.0 / FPS

WHITE = (245, 245, 245)
BLACK = (20, 20, 20)
GRAY = (120, 120, 120)
DARK = (15, 15, 35)
BLUE = (52, 152, 219)
TEAL = (78, 205, 196)
GREEN = (39, 174, 96)
ORANGE = (243, 156, 18)
RED = (231, 76, 60)
PURPLE = (155, 89, 182)
