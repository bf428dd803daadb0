"""Runtime settings for the inspector."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SELECTION_MODES = ("merge", "reset")


def default_state_path() -> Path:
    return Path.home() / ".config" / "stylecraft" / "inspector-state.json"


@dataclass
class InspectorSettings:
    history_limit: int = 20
    persist_delay_ms: int = 300
    text_input_delay_ms: int = 100
    preview_delay_ms: int = 400
    max_text_length: int = 200
    # merge: selecting an element only overwrites the fields the preview reports
    # reset: reported fields are laid over a fresh default snapshot
    selection_mode: str = "merge"
    state_path: Optional[Path] = field(default_factory=default_state_path)

    @classmethod
    def from_env(cls) -> "InspectorSettings":
        settings = cls()
        state_path = os.getenv("STYLECRAFT_STATE_PATH")
        if state_path is not None:
            settings.state_path = Path(state_path).expanduser() if state_path else None

        history_limit = os.getenv("STYLECRAFT_HISTORY_LIMIT")
        if history_limit:
            try:
                settings.history_limit = max(1, int(history_limit))
            except ValueError:
                logger.warning(f"Ignoring invalid STYLECRAFT_HISTORY_LIMIT: {history_limit!r}")

        mode = os.getenv("STYLECRAFT_SELECTION_MODE")
        if mode:
            if mode in SELECTION_MODES:
                settings.selection_mode = mode
            else:
                logger.warning(f"Ignoring unknown STYLECRAFT_SELECTION_MODE: {mode!r}")
        return settings
