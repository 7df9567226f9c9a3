"""One episode of Snake on a fixed grid.

``SnakeGame`` owns the snake and the food for a single episode and applies the
rules: movement, wall and self collision, eating and food respawn, and the
step-count timeout that bounds looping policies.
"""

from snake import Snake, GRID_WIDTH, GRID_HEIGHT
from food import Food

# Episodes longer than this end by timeout
MAX_STEPS = 2 * GRID_WIDTH * GRID_HEIGHT


class SnakeGame:
    def __init__(self, grid_width=GRID_WIDTH, grid_height=GRID_HEIGHT, max_steps=None):
        self.grid_width = grid_width
        self.grid_height = grid_height
        self.max_steps = max_steps if max_steps is not None else 2 * grid_width * grid_height
        self.reset()

    def reset(self):
        self.snake = Snake(self.grid_width, self.grid_height)
        self.food = Food(self.grid_width, self.grid_height, self.snake.get_body())
        self.game_over = False

    def step(self, action):
        """Advance one tick. Returns ``(collided, ate)``."""
        old_tail = self.snake.move(action)
        collided = self.snake.is_colliding()

        ate = self.snake.get_head_position() == self.food.get_position()
        if ate:
            self.snake.grow(old_tail)
            self.food.respawn(self.snake.get_body())

        if collided:
            self.game_over = True
        return collided, ate

    @property
    def timed_out(self):
        return self.snake.steps > self.max_steps

    @property
    def score(self):
        return self.snake.score

    def head_index(self):
        head_x, head_y = self.snake.get_head_position()
        return head_y * self.grid_width + head_x
