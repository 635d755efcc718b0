from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from chameleon_app.core.state import GameState, new_game_state

LOGGER = logging.getLogger(__name__)


class JsonStorage:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> GameState:
        if not self.path.exists():
            return new_game_state()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return GameState.from_dict(data)
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError, AttributeError) as exc:
            LOGGER.warning("state file unreadable, starting fresh path=%s error=%s", self.path, exc)
            return new_game_state()

    def save(self, state: GameState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(state.to_dict(), ensure_ascii=True, indent=2)
        with NamedTemporaryFile("w", delete=False, encoding="utf-8", dir=str(self.path.parent)) as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
            tmp_path = Path(handle.name)
        try:
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        LOGGER.debug("state saved path=%s bytes=%s", self.path, len(payload))
