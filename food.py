import random

from snake import GRID_WIDTH, GRID_HEIGHT


class Food:
    def __init__(self, grid_width=GRID_WIDTH, grid_height=GRID_HEIGHT, snake_body=()):
        self.grid_width = grid_width
        self.grid_height = grid_height
        self.position = self.randomize_position(snake_body)

    def randomize_position(self, snake_body):
        # Rejection sampling; the board is never full during normal play
        while True:
            pos = (random.randrange(self.grid_width), random.randrange(self.grid_height))
            if pos not in snake_body:
                return pos

    def respawn(self, snake_body):
        self.position = self.randomize_position(snake_body)
        return self.position

    def get_position(self):
        return self.position
