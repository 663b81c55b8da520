"""
Game constants for termsnake.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# (row, col) offsets; rows grow downwards on screen
DELTAS = {
    UP: (-1, 0),
    DOWN: (1, 0),
    LEFT: (0, -1),
    RIGHT: (0, 1),
}

# Non-movement command
QUIT = "QUIT"

# Raw key name -> command. Anything not listed here is ignored.
KEY_BINDINGS = {
    "w": UP,
    "W": UP,
    "KEY_UP": UP,
    "s": DOWN,
    "S": DOWN,
    "KEY_DOWN": DOWN,
    "a": LEFT,
    "A": LEFT,
    "KEY_LEFT": LEFT,
    "d": RIGHT,
    "D": RIGHT,
    "KEY_RIGHT": RIGHT,
    "q": QUIT,
    "Q": QUIT,
}

# Cell classifications returned by the board
APPLE = "APPLE"
EMPTY = "EMPTY"

# Game settings
INITIAL_LENGTH = 5
INITIAL_HEADING = RIGHT
DEFAULT_ROWS = 20
DEFAULT_COLS = 40
BORDER = 2
