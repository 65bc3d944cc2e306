import json
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("config.json")


class ConfigError(Exception):
    """Raised when the config file is missing, unreadable or invalid."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHATTALLY_",
        case_sensitive=False,
        extra="ignore",
    )

    oauth_token: str = Field(min_length=1, description="Chat transport authentication token")
    name: str = Field(
        min_length=1,
        description="Bot identity, also the name of the channel whose messages are tallied",
    )

    output_path: Path = Field(
        default=Path("output.txt"),
        description="File overwritten with the top answers on every publish tick",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    def __repr__(self) -> str:
        return (
            f"Settings("
            f"oauth_token='*****', "
            f"name={self.name!r}, "
            f"output_path={str(self.output_path)!r}, "
            f"log_level={self.log_level!r}"
            f")"
        )


def load_settings(path: Path | str = DEFAULT_CONFIG_PATH) -> Settings:
    """Read a JSON config file and validate it into Settings.

    Values in the file take precedence over ``CHATTALLY_*`` environment variables.
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
