"""Dense Q-table stored in one contiguous numpy buffer.

Values are indexed by (flattened head position, state id, action) with
``((position * num_states + state) * num_actions + action)``. Every index is
saturated into range before use, so an out-of-range key reads or writes the
nearest boundary cell instead of failing.

The file format is the raw buffer: little-endian float64 values, positions in
the outer loop, states in the middle, actions innermost, with no header.
"""

import logging

import numpy as np

from snake import GRID_WIDTH, GRID_HEIGHT

logger = logging.getLogger(__name__)

NUM_POSITIONS = GRID_WIDTH * GRID_HEIGHT
NUM_STATES = 256
NUM_ACTIONS = 4

FILE_DTYPE = np.dtype("<f8")


class QTableFileError(OSError):
    """Raised when a Q-table file does not hold a full table."""


def saturate(index, upper):
    """Clamp ``index`` into ``[0, upper - 1]``."""
    if index < 0:
        return 0
    if index >= upper:
        return upper - 1
    return int(index)


class QTable:
    def __init__(self, num_positions=NUM_POSITIONS, num_states=NUM_STATES, num_actions=NUM_ACTIONS):
        self.num_positions = num_positions
        self.num_states = num_states
        self.num_actions = num_actions
        self.values = np.zeros(num_positions * num_states * num_actions, dtype=np.float64)

    @property
    def shape(self):
        return (self.num_positions, self.num_states, self.num_actions)

    @property
    def size(self):
        return self.values.size

    @property
    def nbytes(self):
        return self.size * FILE_DTYPE.itemsize

    def _offset(self, position, state):
        position = saturate(position, self.num_positions)
        state = saturate(state, self.num_states)
        return (position * self.num_states + state) * self.num_actions

    def index(self, position, state, action):
        return self._offset(position, state) + saturate(action, self.num_actions)

    def get(self, position, state, action):
        return float(self.values[self.index(position, state, action)])

    def set(self, position, state, action, value):
        self.values[self.index(position, state, action)] = value

    def add(self, position, state, action, delta):
        i = self.index(position, state, action)
        self.values[i] += delta
        return float(self.values[i])

    def row(self, position, state):
        # View of the action values for one (position, state) pair
        start = self._offset(position, state)
        return self.values[start:start + self.num_actions]

    def max_value(self, position, state):
        return float(np.max(self.row(position, state)))

    def best_action(self, position, state):
        # np.argmax keeps the first maximum, so ties go to the lowest action
        return int(np.argmax(self.row(position, state)))

    def reset(self):
        self.values.fill(0.0)

    # --- Persistence ---

    def to_bytes(self):
        return self.values.astype(FILE_DTYPE, copy=False).tobytes()

    def from_bytes(self, data):
        if len(data) < self.nbytes:
            raise QTableFileError(
                f"Q-table data too short: expected {self.nbytes} bytes, got {len(data)}"
            )
        loaded = np.frombuffer(data, dtype=FILE_DTYPE, count=self.size)
        self.values[:] = loaded

    def save(self, target):
        """Write the table to a path or a writable binary stream."""
        if hasattr(target, "write"):
            target.write(self.to_bytes())
            return
        with open(target, "wb") as f:
            f.write(self.to_bytes())
        logger.info(f"Q-table saved to {target}")

    def load(self, source):
        """Read a table from a path or a readable binary stream.

        Raises OSError if the file cannot be opened and QTableFileError if it
        is shorter than a full table. The current values are kept on failure.
        """
        if hasattr(source, "read"):
            self.from_bytes(source.read(self.nbytes))
            return
        with open(source, "rb") as f:
            data = f.read(self.nbytes)
        self.from_bytes(data)
        logger.info(f"Q-table loaded from {source}")
