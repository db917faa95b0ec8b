"""Configuration for the line editor."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from pi.lineedit.keybindings import KeybindingsConfig

PROMPT_ENV = "PI_LINEEDIT_PROMPT"
WRITE_LOG_ENV = "PI_LINEEDIT_WRITE_LOG"


@dataclass
class LineEditorConfig:
    """Editor configuration."""

    prompt: str = "> "
    keybindings: KeybindingsConfig = field(default_factory=dict)
    bracketed_paste: bool = True
    write_log_path: str = field(default_factory=lambda: os.environ.get(WRITE_LOG_ENV, ""))

    @classmethod
    def from_env(cls) -> LineEditorConfig:
        config = cls()
        prompt = os.environ.get(PROMPT_ENV)
        if prompt is not None:
            config.prompt = prompt
        return config
