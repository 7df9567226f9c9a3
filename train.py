"""Episode loop for training the Q-learning agent."""

import logging
from dataclasses import dataclass, field
from typing import List

from agent import reward_for

logger = logging.getLogger(__name__)


@dataclass
class TrainingStats:
    episodes: int = 0
    max_score: int = 0
    stagnation: int = 0 # Episodes since the last new best score
    window_total: int = 0
    window_episodes: int = 0
    average_scores: List[float] = field(default_factory=list)
    epsilon_history: List[float] = field(default_factory=list)


class Trainer:
    def __init__(self, agent, game, config):
        self.agent = agent
        self.game = game
        self.config = config
        self.stats = TrainingStats()

    def run_episode(self):
        """Play one episode, learning on every step. Returns the score."""
        game = self.game
        agent = self.agent
        game.reset()

        while not game.game_over:
            old_pos = game.head_index()
            old_state = agent.state_of(game)

            action = agent.choose_action(old_pos, old_state)
            collided, ate = game.step(action)
            timed_out = game.timed_out

            reward = reward_for(self.config, collided, ate, timed_out)
            agent.update(old_pos, old_state, action, reward, game.head_index(), agent.state_of(game))

            if timed_out:
                game.game_over = True

        return game.score

    def end_episode(self, score):
        stats = self.stats
        stats.episodes += 1
        stats.window_total += score
        stats.window_episodes += 1

        if score > stats.max_score:
            stats.max_score = score
            stats.stagnation = 0
        else:
            stats.stagnation += 1

        if self.agent.schedule_exploration(stats.stagnation):
            logger.debug(f"Episode {stats.episodes}: no improvement for {stats.stagnation} episodes, "
                         f"epsilon raised to {self.agent.epsilon:.4f}")
            stats.stagnation = 0

        if self.config.report_every > 0 and stats.episodes % self.config.report_every == 0:
            self.report()

    def report(self):
        stats = self.stats
        avg_score = stats.window_total / stats.window_episodes if stats.window_episodes else 0.0
        stats.average_scores.append(avg_score)
        stats.epsilon_history.append(self.agent.epsilon)
        logger.info(f"Episode {stats.episodes}/{self.config.episodes} - Avg Score: {avg_score:.2f}, "
                    f"Max: {stats.max_score}, Epsilon: {self.agent.epsilon:.4f}")
        stats.window_total = 0
        stats.window_episodes = 0

    def train(self):
        logger.info(f"Training for {self.config.episodes} episodes...")
        for _ in range(self.config.episodes):
            score = self.run_episode()
            self.end_episode(score)

        logger.info("Training finished.")
        try:
            self.agent.q_table.save(self.config.qtable_file)
        except OSError as e:
            logger.error(f"Error saving Q-table to {self.config.qtable_file}: {e}")
        return self.stats
