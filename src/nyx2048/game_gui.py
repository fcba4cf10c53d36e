import sys

import pygame

from nyx2048.config import FPS, spawn_delay_ms
from nyx2048.controls import QUIT, RESTART, UNDO, command_for_key, swipe_direction
from nyx2048.game import Game2048
from nyx2048.persistence import default_persistence
from nyx2048.scheduler import DelayedSpawner


COLORS = {
    'background': (15, 23, 42),
    'grid_background': (51, 65, 85),
    'empty_cell': (71, 85, 105),
    'text_dark': (30, 41, 59),
    'text_light': (255, 255, 255),
    'text_muted': (148, 163, 184),
    'best': (250, 204, 21),
    'overlay': (15, 23, 42, 190),
    # tile colors
    2: (226, 232, 240),
    4: (203, 213, 225),
    8: (253, 186, 116),
    16: (251, 146, 60),
    32: (248, 113, 113),
    64: (239, 68, 68),
    128: (250, 204, 21),
    256: (234, 179, 8),
    512: (74, 222, 128),
    1024: (96, 165, 250),
    2048: (168, 85, 247),
    4096: (236, 72, 153),
    8192: (99, 102, 241),
}
BEYOND_COLOR = (31, 41, 55)


class GameGUI:
    def __init__(self, game=None, delay_ms=None):
        """initialize game GUI"""
        pygame.init()

        self.game = game if game is not None else Game2048(persistence=default_persistence())
        self.spawner = DelayedSpawner(self.game, spawn_delay_ms() if delay_ms is None else delay_ms)

        # GUI settings
        self.cell_size = 100
        self.cell_margin = 10
        self.header_height = 140

        # window size
        grid_size = 4 * self.cell_size + 5 * self.cell_margin
        self.window_width = grid_size
        self.window_height = grid_size + self.header_height

        # create window
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Nyx 2048")

        # fonts
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        # game clock
        self.clock = pygame.time.Clock()

        # win banner shows once per game, drag start for mouse swipes
        self.show_win = False
        self.drag_start = None

    def get_tile_color(self, value):
        """get background color for a tile value"""
        if value in COLORS:
            return COLORS[value]
        elif value > 8192:
            return BEYOND_COLOR
        else:
            return COLORS['empty_cell']

    def get_text_color(self, value):
        """get text color for a tile value"""
        if value <= 4:
            return COLORS['text_dark']
        else:
            return COLORS['text_light']

    def draw_board(self):
        """draw the game board"""
        self.screen.fill(COLORS['background'])

        self.draw_header()

        # draw the grid background
        grid_y = self.header_height
        grid_rect = pygame.Rect(0, grid_y, self.window_width, self.window_width)
        pygame.draw.rect(self.screen, COLORS['grid_background'], grid_rect)

        board = self.game.board
        for row in range(4):
            for col in range(4):
                self.draw_cell(row, col, board[row][col])

        if self.game.game_over:
            self.draw_overlay("Game Over", "New Best Score!" if self.game.is_new_best else "Press R to restart")
        elif self.show_win:
            self.draw_overlay("You Win!", "Press any key to keep playing")

    def draw_header(self):
        """draw the header with scores and instructions"""
        score_text = self.font_large.render(f"Score: {self.game.score:,}", True, COLORS['text_light'])
        self.screen.blit(score_text, (20, 20))

        best_text = self.font_medium.render(f"Best: {self.game.best_score:,}", True, COLORS['best'])
        self.screen.blit(best_text, (20, 65))

        moves_text = self.font_small.render(f"Moves: {self.game.move_count}", True, COLORS['text_muted'])
        self.screen.blit(moves_text, (self.window_width - moves_text.get_width() - 20, 30))

        help_text = "Arrows/WASD or drag to move | U undo | R restart | ESC quit"
        help_surface = self.font_small.render(help_text, True, COLORS['text_muted'])
        self.screen.blit(help_surface, (20, 105))

    def draw_cell(self, row, col, value):
        """draw a single cell of the grid"""
        x = col * (self.cell_size + self.cell_margin) + self.cell_margin
        y = row * (self.cell_size + self.cell_margin) + self.cell_margin + self.header_height

        cell_rect = pygame.Rect(x, y, self.cell_size, self.cell_size)
        pygame.draw.rect(self.screen, self.get_tile_color(value), cell_rect, border_radius=8)

        if value != 0:
            # choose font size based on number of digits
            if value < 100:
                font = self.font_large
            elif value < 1000:
                font = self.font_medium
            else:
                font = self.font_small

            text_surface = font.render(str(value), True, self.get_text_color(value))
            text_rect = text_surface.get_rect()
            text_rect.center = (x + self.cell_size // 2, y + self.cell_size // 2)
            self.screen.blit(text_surface, text_rect)

    def draw_overlay(self, title, subtitle):
        """dim the grid and show a message on top"""
        overlay = pygame.Surface((self.window_width, self.window_width), pygame.SRCALPHA)
        overlay.fill(COLORS['overlay'])
        self.screen.blit(overlay, (0, self.header_height))

        center_x = self.window_width // 2
        center_y = self.header_height + self.window_width // 2

        title_surface = self.font_large.render(title, True, COLORS['text_light'])
        self.screen.blit(title_surface, title_surface.get_rect(center=(center_x, center_y - 20)))

        subtitle_surface = self.font_small.render(subtitle, True, COLORS['best'])
        self.screen.blit(subtitle_surface, subtitle_surface.get_rect(center=(center_x, center_y + 25)))

    def run_command(self, command):
        """apply a key or swipe command, returns False to quit"""
        if command == QUIT:
            return False

        was_won = self.game.won
        now = pygame.time.get_ticks()

        if command == RESTART:
            self.spawner.restart()
            self.show_win = False
            print("Game restarted!")
        elif command == UNDO:
            if self.spawner.undo():
                print("Move undone")
        elif command is not None:
            self.spawner.submit(command, now)

        if self.game.won and not was_won:
            self.show_win = True
            print(f"You reached 2048! Score: {self.game.score:,}")
        return True

    def handle_keypress(self, key):
        """keyboard input"""
        command = command_for_key(pygame.key.name(key))

        # any key except quit closes the win banner
        if self.show_win and command != QUIT:
            self.show_win = False
            return True

        return self.run_command(command)

    def handle_mouse(self, event):
        """mouse drags act as swipes"""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.drag_start = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and self.drag_start:
            dx = event.pos[0] - self.drag_start[0]
            dy = event.pos[1] - self.drag_start[1]
            self.drag_start = None
            direction = swipe_direction(dx, dy)
            if direction is not None and not self.show_win:
                self.run_command(direction)

    def run(self):
        """main loop"""
        print("Nyx 2048 started!")
        print("Use arrow keys or WASD to move tiles, drag with the mouse to swipe")
        print("Press U to undo, R to restart, ESC to quit")
        print()

        was_over = self.game.game_over
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self.handle_keypress(event.key)
                elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                    self.handle_mouse(event)

            # a queued move may play here and win the game
            was_won = self.game.won
            self.spawner.tick(pygame.time.get_ticks())
            if self.game.won and not was_won:
                self.show_win = True

            if self.game.game_over and not was_over:
                print(f"Game over! Score: {self.game.score:,}  Max tile: {self.game.max_tile}")
                if self.game.is_new_best:
                    print("New best score!")
            was_over = self.game.game_over

            self.draw_board()
            pygame.display.flip()
            self.clock.tick(FPS)

        # complete a pending spawn so the save is a whole move
        self.spawner.flush()
        pygame.quit()


def main():
    try:
        gui = GameGUI()
        gui.run()
    except Exception as e:
        print(f"Error running game: {e}")
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
