import logging
import types

import pytest

from retris import __main__ as cli
from retris.config import GameConfig


def test_parser_defaults_build_default_config():
    args = cli.build_parser().parse_args([])
    assert GameConfig.from_args(args) == GameConfig()


def test_parser_flags_reach_config():
    args = cli.build_parser().parse_args(
        ["--width", "12", "--seed", "7", "--randomizer", "uniform", "--no-wall-kicks"]
    )
    config = GameConfig.from_args(args)
    assert config.width == 12
    assert config.seed == 7
    assert config.randomizer == "uniform"
    assert config.wall_kicks is False


def test_invalid_dimensions_exit_with_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--width", "2"])
    assert excinfo.value.code == 2
    assert "at least 4x4" in capsys.readouterr().err


@pytest.fixture
def package_logger():
    logger = logging.getLogger("retris")
    before = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        if handler not in before:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)


def fake_wrapper_recording(seen):
    def fake_wrapper(func, config):
        seen["func"] = func
        seen["config"] = config
        return types.SimpleNamespace(score=1200, level=1, lines=12)

    return fake_wrapper


def test_main_prints_final_score(monkeypatch, capsys, package_logger):
    seen = {}
    monkeypatch.setattr(cli.curses, "wrapper", fake_wrapper_recording(seen))

    assert cli.main(["--height", "22"]) == 0
    assert seen["func"] is cli.play
    assert seen["config"].height == 22
    assert "Score: 1200" in capsys.readouterr().out


def test_log_file_receives_session_summary(monkeypatch, tmp_path, package_logger):
    log_file = tmp_path / "retris.log"
    monkeypatch.setattr(cli.curses, "wrapper", fake_wrapper_recording({}))

    assert cli.main(["--log-file", str(log_file), "--log-level", "debug"]) == 0

    assert package_logger.level == logging.DEBUG
    assert "Session ended with score 1200" in log_file.read_text()


def test_without_log_file_package_logs_are_silenced(monkeypatch, package_logger):
    monkeypatch.setattr(cli.curses, "wrapper", fake_wrapper_recording({}))

    cli.main([])
    cli.main([])

    null_handlers = [h for h in package_logger.handlers if isinstance(h, logging.NullHandler)]
    assert len(null_handlers) == 1
    assert not any(isinstance(h, logging.FileHandler) for h in package_logger.handlers)
