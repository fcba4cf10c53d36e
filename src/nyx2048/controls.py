"""
map keyboard keys and swipe gestures to game commands
"""
from nyx2048.config import SWIPE_THRESHOLD
from nyx2048.moves import Direction

RESTART = 'restart'
UNDO = 'undo'
QUIT = 'quit'

KEY_COMMANDS = {
    'up': Direction.UP,
    'down': Direction.DOWN,
    'left': Direction.LEFT,
    'right': Direction.RIGHT,
    'w': Direction.UP,
    's': Direction.DOWN,
    'a': Direction.LEFT,
    'd': Direction.RIGHT,
    'r': RESTART,
    'u': UNDO,
    'escape': QUIT,
}


def command_for_key(name):
    """command for a key name (as given by pygame.key.name), or None"""
    if not name:
        return None
    return KEY_COMMANDS.get(name.lower())


def swipe_direction(dx, dy, threshold=SWIPE_THRESHOLD):
    """
    direction of a drag from its vector (screen coordinates, y grows down)

    the longer axis decides, drags not longer than threshold are ignored
    """
    if abs(dx) > abs(dy):
        if abs(dx) > threshold:
            return Direction.RIGHT if dx > 0 else Direction.LEFT
    elif abs(dy) > threshold:
        return Direction.DOWN if dy > 0 else Direction.UP
    return None
