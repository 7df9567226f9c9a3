import argparse
import logging
import random
import time

from matplotlib import pyplot as plt
import pygame

from agent import QLearningAgent
from config import Config, DEFAULT_QTABLE_FILE
from game import SnakeGame
from snake import GRID_WIDTH, GRID_HEIGHT
from train import Trainer

logger = logging.getLogger(__name__)

# Screen dimensions
CELL_SIZE = 30
WIDTH = GRID_WIDTH * CELL_SIZE
HEIGHT = GRID_HEIGHT * CELL_SIZE

# Colors
BLACK = (0, 0, 0)
GRAY = (50, 50, 50)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
TEAL = (0, 255, 200)


def setup_logging(level=logging.INFO):
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(message)s', datefmt='%H:%M:%S'))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)


def draw_grid(surface):
    for x in range(0, WIDTH + 1, CELL_SIZE):
        pygame.draw.line(surface, GRAY, (x, 0), (x, HEIGHT))
    for y in range(0, HEIGHT + 1, CELL_SIZE):
        pygame.draw.line(surface, GRAY, (0, y), (WIDTH, y))


def draw_snake(surface, snake):
    for i, segment in enumerate(snake.get_body()):
        color = GREEN if i == 0 else TEAL
        pygame.draw.rect(surface, color, (segment[0] * CELL_SIZE, segment[1] * CELL_SIZE, CELL_SIZE, CELL_SIZE))


def draw_food(surface, food):
    x, y = food.get_position()
    pygame.draw.rect(surface, RED, (x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE))


def plot_training(stats, config, filename):
    plt.figure() # Ensure a new figure for the plot
    plt.plot([(i + 1) * config.report_every for i in range(len(stats.average_scores))], stats.average_scores)
    plt.title(f'Average Score per {config.report_every} Episodes')
    plt.xlabel('Episode')
    plt.ylabel('Average Score')
    plt.savefig(filename)
    plt.close()
    logger.info(f"Training plot saved to {filename}")


def replay(agent, config):
    """Play one game with the greedy policy in a pygame window. Returns the score."""
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Snake AI")

    game = SnakeGame()
    quit_requested = False
    try:
        while not quit_requested and not game.game_over:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    quit_requested = True

            action = agent.greedy_action(game.head_index(), agent.state_of(game))
            game.step(action)
            if game.timed_out:
                game.game_over = True

            screen.fill(BLACK)
            draw_grid(screen)
            draw_food(screen, game.food)
            draw_snake(screen, game.snake)
            pygame.display.flip()

            pygame.time.delay(config.delay)
    finally:
        pygame.quit()
    return game.score


def build_parser():
    defaults = Config()
    parser = argparse.ArgumentParser(description="Tabular Q-learning Snake agent")
    parser.add_argument("--load", action="store_true", help="Load the Q-table from --file instead of training.")
    parser.add_argument("--file", dest="qtable_file", default=DEFAULT_QTABLE_FILE, help="Q-table file to load, or to save after training.")
    parser.add_argument("--learning-rate", type=float, default=defaults.learning_rate)
    parser.add_argument("--discount-factor", type=float, default=defaults.discount_factor)
    parser.add_argument("--epsilon-decay", type=float, default=defaults.epsilon_decay)
    parser.add_argument("--e-start", type=float, default=defaults.e_start, help="Starting (and maximum) exploration rate.")
    parser.add_argument("--e-end", type=float, default=defaults.e_end, help="Floor exploration rate.")
    parser.add_argument("--episodes", type=int, default=defaults.episodes, help="Number of episodes for training.")
    parser.add_argument("--report-every", type=int, default=defaults.report_every, help="Episodes per progress report.")
    parser.add_argument("--food-reward", type=float, default=defaults.food_reward)
    parser.add_argument("--wall-penalty", type=float, default=defaults.wall_penalty)
    parser.add_argument("--step-penalty", type=float, default=defaults.step_penalty)
    parser.add_argument("--delay", type=int, default=defaults.delay, help="Milliseconds per frame during replay.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random number generator.")
    parser.add_argument("--plot", default=None, help="Save a plot of the training averages to this file.")
    parser.add_argument("--no-replay", action="store_true", help="Skip the replay window.")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    config = Config.from_args(args)
    # Single global stream, seeded once
    random.seed(config.seed if config.seed is not None else time.time_ns())

    agent = QLearningAgent(config)
    if args.load:
        try:
            agent.q_table.load(config.qtable_file)
        except OSError as e:
            logger.error(f"Error loading Q-table from {config.qtable_file}: {e}")
    else:
        stats = Trainer(agent, SnakeGame(), config).train()
        if args.plot and stats.average_scores:
            plot_training(stats, config, args.plot)

    if args.no_replay:
        return None

    score = replay(agent, config)
    print(f"Game over. Final score: {score}")
    return score


if __name__ == "__main__":
    main()
