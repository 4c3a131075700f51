"""Config loading, setup, validating, writing."""

import json
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Self

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from hlsstitch.constants import ENV_PREFIX, SETTINGS_FILE, TESTING_ENV_VAR
from hlsstitch.utils.logger import LoggingConf, get_logger

from .app import StitchConf

logger = get_logger(__name__)

__all__ = [
    "HLSStitchConf",
    "StitchConf",
]


class HLSStitchConf(BaseSettings):
    """Settings Definition."""

    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env" if not os.getenv(TESTING_ENV_VAR) else None,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        json_file=SETTINGS_FILE,
    )

    app: StitchConf = Field(default_factory=StitchConf)
    logging: LoggingConf = Field(default_factory=LoggingConf)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003 Don't use but must include.
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Init args, then .env, then env vars, then the JSON file. Tests only get init and env."""
        if os.getenv(TESTING_ENV_VAR):
            return (init_settings, env_settings)

        return (init_settings, dotenv_settings, env_settings, JsonConfigSettingsSource(settings_cls))  # pragma: no cover

    def write_backup_config(
        self,
        config_path: Path,
        existing_data: Any,  # noqa: ANN401 JSON things
        reason: str = "Validation has changed the config file",
    ) -> Path:
        """Save what was in a config file before it gets overwritten, returns the backup path."""
        backup_file = _backup_path(config_path)
        backup_file.parent.mkdir(parents=True, exist_ok=True)
        logger.warning("%s, backing up the old one to %s", reason, backup_file)
        backup_file.write_text(json.dumps(existing_data))
        return backup_file

    def write_config(self, config_path: Path | None = None) -> None:
        """Write the current settings as JSON, backing up an existing file that differs."""
        config_path = config_path or SETTINGS_FILE
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if not config_path.is_file():
            logger.warning("Writing fresh config file at %s", config_path.absolute())
        else:
            existing_data = json.loads(config_path.read_text())
            if existing_data != self.model_dump(mode="json"):
                self.write_backup_config(config_path, existing_data)

        logger.info("Writing config to %s", config_path)
        config_path.write_text(self.model_dump_json(indent=2))

    @classmethod
    def force_load_config_file(cls, config_path: Path) -> Self:
        """Load a config file, its contents win over env vars. Missing files give the defaults."""
        if not config_path.is_file():
            logger.warning("Config file %s does not exist, loading defaults", config_path.absolute())
            return cls()

        logger.info("Loading config from %s", config_path.absolute())
        return cls(**json.loads(config_path.read_text()))


def _backup_path(config_path: Path) -> Path:
    time_str = datetime.now(tz=UTC).strftime("%Y-%m-%d_%H%M%S")
    return config_path.parent / "config_backups" / f"{config_path.stem}_{time_str}{config_path.suffix}.bak"
