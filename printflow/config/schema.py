"""Configuration schema using Pydantic."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class Config(BaseModel):
    """Root configuration for printflow."""

    data_dir: str = "~/.printflow/data"
    log_level: str = "WARNING"
    autosave_delay_ms: int = Field(default=800, ge=0)  # Quiet period before a text edit is written
    default_title: str = "PrintFlow Pro"

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def data_path(self) -> Path:
        """Expanded data directory path."""
        return Path(self.data_dir).expanduser()
