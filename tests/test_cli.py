from unittest.mock import patch

from idleview.app import config_from_args, parse_args
from idleview.config import AppConfig


def test_defaults_leave_config_untouched():
    assert config_from_args(parse_args([])) == AppConfig()


def test_cli_args_override_config():
    test_args = [
        "idleview",
        "--assets",
        "models/skull",
        "--fov",
        "30",
        "--seed",
        "5",
        "--no-grayscale",
        "--frame-rate-independent",
        "--log-level",
        "DEBUG",
        "--log-file",
        "test.log",
    ]

    with patch("sys.argv", test_args):
        cfg = config_from_args(parse_args())

    assert cfg.asset_dir == "models/skull"
    assert cfg.fov == 30.0
    assert cfg.seed == 5
    assert cfg.grayscale is False
    assert cfg.frame_rate_independent is True
    assert cfg.log_level == "DEBUG"
    assert cfg.log_file == "test.log"
