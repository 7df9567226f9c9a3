from snake import Snake, UP, RIGHT, DOWN, LEFT, GRID_WIDTH, GRID_HEIGHT
from food import Food


def test_new_snake_starts_in_center():
    snake = Snake()
    assert snake.get_body() == [(GRID_WIDTH // 2, GRID_HEIGHT // 2)]
    assert snake.direction == UP
    assert snake.score == 0
    assert snake.steps == 0


def test_move_follows_head():
    snake = Snake()
    snake.body = [(5, 5), (5, 6), (5, 7)]
    old_tail = snake.move(RIGHT)
    assert old_tail == (5, 7)
    assert snake.get_body() == [(6, 5), (5, 5), (5, 6)]
    assert snake.direction == RIGHT
    assert snake.steps == 1


def test_grow_keeps_old_tail():
    snake = Snake()
    snake.body = [(5, 5), (5, 6)]
    tail = snake.move(UP)
    snake.grow(tail)
    assert snake.get_body() == [(5, 4), (5, 5), (5, 6)]
    assert snake.score == 1


def test_wall_collision():
    snake = Snake()
    snake.body = [(0, 0)]
    snake.move(LEFT)
    assert snake.is_colliding()


def test_reversing_into_neck_collides():
    snake = Snake()
    snake.body = [(5, 5), (6, 5), (7, 5)]
    snake.move(RIGHT)
    assert snake.get_head_position() == (6, 5)
    assert snake.is_colliding()


def test_moving_onto_vacated_tail_is_safe():
    snake = Snake()
    snake.body = [(5, 5), (6, 5), (6, 6), (5, 6)]
    snake.move(DOWN)
    assert snake.get_head_position() == (5, 6)
    assert not snake.is_colliding()


def test_food_never_lands_on_snake():
    body = [(x, y) for x in range(GRID_WIDTH) for y in range(GRID_HEIGHT) if (x, y) != (3, 4)]
    food = Food(snake_body=body)
    assert food.get_position() == (3, 4)
