"""Training and replay parameters for one run."""

from dataclasses import dataclass, fields
from typing import Optional

DEFAULT_QTABLE_FILE = "snake_qtable.bin"


@dataclass(frozen=True)
class Config:
    # Learning
    learning_rate: float = 0.1
    discount_factor: float = 0.99

    # Exploration
    epsilon_decay: float = 0.9999
    e_start: float = 1.0
    e_end: float = 0.0001

    # Training run
    episodes: int = 200000
    report_every: int = 1000
    qtable_file: str = DEFAULT_QTABLE_FILE
    seed: Optional[int] = None

    # Rewards
    food_reward: float = 1.0
    wall_penalty: float = -1.0
    step_penalty: float = -0.025

    # Replay only, milliseconds per frame
    delay: int = 50

    @classmethod
    def from_args(cls, args):
        """Build a config from an argparse namespace, skipping unset options."""
        values = {}
        for field in fields(cls):
            value = getattr(args, field.name, None)
            if value is not None:
                values[field.name] = value
        return cls(**values)
