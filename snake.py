# Grid dimensions
GRID_WIDTH = 30
GRID_HEIGHT = 20

# Snake directions, indexed by action (y grows downward)
UP = 0
RIGHT = 1
DOWN = 2
LEFT = 3
ACTIONS = [UP, RIGHT, DOWN, LEFT]
DIRECTION_VECTORS = [(0, -1), (1, 0), (0, 1), (-1, 0)]


def in_bounds(position, grid_width=GRID_WIDTH, grid_height=GRID_HEIGHT):
    x, y = position
    return 0 <= x < grid_width and 0 <= y < grid_height


class Snake:
    def __init__(self, grid_width=GRID_WIDTH, grid_height=GRID_HEIGHT):
        self.grid_width = grid_width
        self.grid_height = grid_height

        self.body = [(self.grid_width // 2, self.grid_height // 2)]
        self.direction = UP
        self.score = 0
        self.steps = 0

    def move(self, action): # Returns the tail position from before the move
        self.direction = action
        old_tail = self.body[-1]

        head_x, head_y = self.body[0]
        dir_x, dir_y = DIRECTION_VECTORS[action]
        new_head = (head_x + dir_x, head_y + dir_y)

        # Every segment takes its predecessor's place, the head steps forward
        self.body = [new_head] + self.body[:-1]
        self.steps += 1
        return old_tail

    def grow(self, tail):
        # New tail sits where the old tail was before the move
        self.body.append(tail)
        self.score += 1

    def is_colliding(self):
        head = self.body[0]
        if not in_bounds(head, self.grid_width, self.grid_height):
            return True
        return head in self.body[1:]

    @property
    def head(self):
        return self.body[0]

    def get_head_position(self):
        return self.body[0]

    def get_body(self):
        return self.body
