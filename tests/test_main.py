import logging

import numpy as np

import main
from config import Config
from qtable import QTable


def test_defaults_match_config():
    args = main.build_parser().parse_args([])
    config = Config.from_args(args)
    assert config == Config()
    assert not args.load


def test_overrides():
    args = main.build_parser().parse_args([
        "--learning-rate", "0.5", "--discount-factor", "0.9", "--episodes", "10",
        "--e-start", "0.5", "--e-end", "0.1", "--wall-penalty", "-5", "--delay", "0",
        "--file", "custom.bin", "--seed", "7",
    ])
    config = Config.from_args(args)
    assert config.learning_rate == 0.5
    assert config.discount_factor == 0.9
    assert config.episodes == 10
    assert config.e_start == 0.5
    assert config.e_end == 0.1
    assert config.wall_penalty == -5.0
    assert config.delay == 0
    assert config.qtable_file == "custom.bin"
    assert config.seed == 7


def test_train_without_replay(tmp_path):
    path = tmp_path / "q.bin"
    plot = tmp_path / "plot.png"
    main.main(["--episodes", "20", "--report-every", "10", "--file", str(path),
               "--seed", "3", "--plot", str(plot), "--no-replay"])
    assert path.stat().st_size == QTable().size * 8
    assert plot.exists()


def test_load_missing_file_is_not_fatal(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        result = main.main(["--load", "--file", str(tmp_path / "missing.bin"), "--no-replay"])
    assert result is None
    assert "Error loading Q-table" in caplog.text


def test_load_skips_training(tmp_path, monkeypatch):
    table = QTable()
    table.set(0, 0, 2, 1.0)
    path = tmp_path / "q.bin"
    table.save(str(path))

    loaded = {}

    def fake_replay(agent, config):
        loaded["values"] = agent.q_table.values.copy()
        return 0

    monkeypatch.setattr(main, "replay", fake_replay)
    assert main.main(["--load", "--file", str(path)]) == 0
    assert np.array_equal(loaded["values"], table.values)
