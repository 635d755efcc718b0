import logging
from pathlib import Path

from chameleon_app.config import ChameleonConfig
from chameleon_app.logging_setup import ROOT_LOGGER_NAME, setup_logging


def test_config_defaults(monkeypatch, tmp_path) -> None:
    for name in (
        "CHAMELEON_DECAY_SECONDS",
        "CHAMELEON_PLAYTIME_SECONDS",
        "CHAMELEON_GROWTH_CHECK_SECONDS",
        "CHAMELEON_REACTION_SECONDS",
        "CHAMELEON_MINUTES_PER_DAY",
        "CHAMELEON_LOG_LEVEL",
        "CHAMELEON_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CHAMELEON_DATA_DIR", str(tmp_path))

    cfg = ChameleonConfig.from_env()

    assert cfg.data_dir == Path(tmp_path)
    assert cfg.state_path == Path(tmp_path) / "chameleon_state.json"
    assert cfg.decay_seconds == 10
    assert cfg.playtime_seconds == 60
    assert cfg.growth_check_seconds == 60
    assert cfg.reaction_seconds == 2
    assert cfg.minutes_per_day == 10
    assert cfg.log_level == "INFO"
    assert cfg.debug is False


def test_config_env_overrides_and_bad_values(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("CHAMELEON_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CHAMELEON_DECAY_SECONDS", "abc")
    monkeypatch.setenv("CHAMELEON_REACTION_SECONDS", "0")
    monkeypatch.setenv("CHAMELEON_MINUTES_PER_DAY", "3")
    monkeypatch.setenv("CHAMELEON_LOG_LEVEL", "debug")
    monkeypatch.setenv("CHAMELEON_DEBUG", "yes")

    cfg = ChameleonConfig.from_env()

    assert cfg.decay_seconds == 10
    assert cfg.reaction_seconds == 1
    assert cfg.minutes_per_day == 3
    assert cfg.log_level == "DEBUG"
    assert cfg.debug is True


def test_setup_logging_writes_rotating_file_once(tmp_path) -> None:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved = list(logger.handlers)
    for handler in saved:
        logger.removeHandler(handler)
    try:
        first = setup_logging(tmp_path / "logs", level="DEBUG")
        second = setup_logging(tmp_path / "logs", level="INFO")
        assert first is second
        assert len(first.handlers) == 1
        assert first.level == logging.INFO

        logging.getLogger("chameleon_app.controller").warning("tank too hot temp=%s", 95)
        for handler in first.handlers:
            handler.flush()
        text = (tmp_path / "logs" / "chameleon.log").read_text(encoding="utf-8")
        assert "tank too hot temp=95" in text
        assert "[WARNING]" in text
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        for handler in saved:
            logger.addHandler(handler)
        logger.setLevel(logging.NOTSET)
