# src/pnl_cards/config/models.py

# --- Built Ins  ---
import os
from typing import Literal, Mapping, Optional

# --- Installed  ---
from pydantic import BaseModel, Field, computed_field


class ServiceSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    environment: str = "development"
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    max_body_bytes: int = Field(
        default=1024 * 1024,
        description="Largest accepted request body, in bytes.",
    )
    fonts_dir: Optional[str] = Field(
        default=None,
        description="Directory holding the card font files; searched before the bundled assets.",
    )
    font_family: str = "Roboto"

    @computed_field
    @property
    def enable_debug_routes(self) -> bool:
        """Debug render routes are mounted everywhere except production."""
        return self.environment.lower() != "production"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceSettings":
        env = os.environ if environ is None else environ
        values: dict = {}
        if "HOST" in env:
            values["host"] = env["HOST"]
        if "PORT" in env:
            values["port"] = env["PORT"]
        environment = env.get("APP_ENV") or env.get("NODE_ENV")
        if environment:
            values["environment"] = environment
        if "LOG_LEVEL" in env:
            values["log_level"] = env["LOG_LEVEL"].upper()
        if "FONTS_DIR" in env:
            values["fonts_dir"] = env["FONTS_DIR"]
        if "FONT_FAMILY" in env:
            values["font_family"] = env["FONT_FAMILY"]
        return cls(**values)
