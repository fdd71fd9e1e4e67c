"""Configuration model for quizmark."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Settings(BaseModel):
    log_level: str = "WARNING"
    summary_cache_size: int = Field(default=32, ge=1)
    time_per_question: int = Field(default=30, ge=1)
    difficulty: Difficulty = Difficulty.MEDIUM
    data_dir: Path = Path.home() / ".quizmark"

    def get_log_level(self) -> str:
        return os.environ.get("QUIZMARK_LOG_LEVEL") or self.log_level

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        config_path = config_path or Path.home() / ".quizmark" / "config.yaml"
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()

    def save(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.data_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
