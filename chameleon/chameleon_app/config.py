from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _default_data_dir() -> Path:
    override = os.getenv("CHAMELEON_DATA_DIR", "").strip()
    if override:
        return Path(override)

    system = platform.system().lower()
    if system == "windows":
        appdata = os.getenv("APPDATA", "").strip()
        if appdata:
            return Path(appdata) / "chameleon"
    return Path.home() / ".chameleon"


@dataclass(frozen=True)
class ChameleonConfig:
    data_dir: Path
    decay_seconds: int
    playtime_seconds: int
    growth_check_seconds: int
    reaction_seconds: int
    minutes_per_day: int
    log_level: str
    debug: bool

    @property
    def state_path(self) -> Path:
        return self.data_dir / "chameleon_state.json"

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"

    @classmethod
    def from_env(cls) -> "ChameleonConfig":
        log_level = os.getenv("CHAMELEON_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        return cls(
            data_dir=_default_data_dir(),
            decay_seconds=max(1, _env_int("CHAMELEON_DECAY_SECONDS", 10)),
            playtime_seconds=max(1, _env_int("CHAMELEON_PLAYTIME_SECONDS", 60)),
            growth_check_seconds=max(1, _env_int("CHAMELEON_GROWTH_CHECK_SECONDS", 60)),
            reaction_seconds=max(1, _env_int("CHAMELEON_REACTION_SECONDS", 2)),
            minutes_per_day=max(1, _env_int("CHAMELEON_MINUTES_PER_DAY", 10)),
            log_level=log_level,
            debug=_env_flag("CHAMELEON_DEBUG"),
        )

    @classmethod
    def defaults(cls, data_dir: str | Path) -> "ChameleonConfig":
        return cls(
            data_dir=Path(data_dir),
            decay_seconds=10,
            playtime_seconds=60,
            growth_check_seconds=60,
            reaction_seconds=2,
            minutes_per_day=10,
            log_level="INFO",
            debug=False,
        )
