import random

from snake import ACTIONS, DIRECTION_VECTORS, GRID_WIDTH, GRID_HEIGHT, in_bounds
from qtable import QTable

# Food-direction bits
FOOD_RIGHT = 1 << 0
FOOD_LEFT = 1 << 1
FOOD_BELOW = 1 << 2
FOOD_ABOVE = 1 << 3
# Danger bits start here, one per direction in action order (up, right, down, left)
DANGER_SHIFT = 4

# Episodes without a new best score before exploration is raised again
STAGNATION_LIMIT = 10000


def get_state(head, food, body, grid_width=GRID_WIDTH, grid_height=GRID_HEIGHT):
    head_x, head_y = head
    food_x, food_y = food

    # Relative position of food
    dx = food_x - head_x
    dy = food_y - head_y

    state = 0
    if dx > 0:
        state |= FOOD_RIGHT
    elif dx < 0:
        state |= FOOD_LEFT
    if dy > 0:
        state |= FOOD_BELOW
    elif dy < 0:
        state |= FOOD_ABOVE

    # Danger: wall or own body in each neighbouring cell
    others = body[1:]
    for action, (dir_x, dir_y) in enumerate(DIRECTION_VECTORS):
        neighbour = (head_x + dir_x, head_y + dir_y)
        if not in_bounds(neighbour, grid_width, grid_height) or neighbour in others:
            state |= 1 << (action + DANGER_SHIFT)
    return state


def reward_for(config, collided, ate, timed_out=False):
    if collided or timed_out:
        return config.wall_penalty
    if ate:
        return config.food_reward
    return config.step_penalty


class QLearningAgent:
    def __init__(self, config, q_table=None):
        self.config = config
        self.q_table = q_table if q_table is not None else QTable()
        self.lr = config.learning_rate
        self.gamma = config.discount_factor
        self.epsilon = config.e_start
        self.epsilon_decay = config.epsilon_decay
        self.max_epsilon = config.e_start
        self.min_epsilon = config.e_end
        self.actions = ACTIONS # 0: UP, 1: RIGHT, 2: DOWN, 3: LEFT

    def state_of(self, game):
        snake = game.snake
        return get_state(snake.get_head_position(), game.food.get_position(), snake.get_body(),
                         game.grid_width, game.grid_height)

    def choose_action(self, position, state, epsilon=None):
        if epsilon is None:
            epsilon = self.epsilon
        if random.random() < epsilon:
            return random.randrange(len(self.actions))  # Explore
        return self.q_table.best_action(position, state)  # Exploit

    def greedy_action(self, position, state):
        return self.q_table.best_action(position, state)

    def update(self, old_pos, old_state, action, reward, new_pos, new_state):
        """One-step Q-learning update; returns the new Q-value."""
        old_value = self.q_table.get(old_pos, old_state, action)
        next_max = self.q_table.max_value(new_pos, new_state)
        return self.q_table.add(old_pos, old_state, action,
                                self.lr * (reward + self.gamma * next_max - old_value))

    def schedule_exploration(self, stagnation):
        """Per-episode epsilon update. Returns True when exploration was raised."""
        if stagnation > STAGNATION_LIMIT:
            # Stuck on a plateau: back off the decay to explore again
            self.epsilon = min(self.max_epsilon, self.epsilon / self.epsilon_decay)
            return True
        self.epsilon = max(self.min_epsilon, self.epsilon * self.epsilon_decay)
        return False

