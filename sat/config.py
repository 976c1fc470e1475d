import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from sat.domain.auth.model.role import DEFAULT_ROLE_RANKS, RoleHierarchy
from sat.domain.shared.authorization.scope import DEFAULT_MISSING_POSITION_LEVEL

CONFIG_FILE_ENV = "SAT_CONFIG_FILE"
LOG_FILE_ENV = "SAT_LOG_FILE"

# Loggers that drown out authorization audit lines at DEBUG
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "httpx", "asyncio")


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings read from the YAML file named by SAT_CONFIG_FILE.

    A missing or empty file contributes nothing.
    """

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data = self._read(os.environ.get(CONFIG_FILE_ENV))

    @staticmethod
    def _read(config_file: str | None) -> dict[str, Any]:
        if not config_file or not Path(config_file).is_file():
            return {}
        loaded = yaml.safe_load(Path(config_file).read_text())
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{config_file}: top level must be a mapping, got {type(loaded).__name__}")
        return loaded

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class Server(BaseModel):
    name: str = "Staff Attendance Tracking"
    version: str = "0.1.0"


class LoggingConfig(BaseModel):
    """Root logger settings. Output goes to stderr unless SAT_LOG_FILE is set."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        return os.environ.get(LOG_FILE_ENV)


class AuthorizationConfig(BaseModel):
    """Role ranks and scope defaults.

    ``role_ranks`` overrides or extends the built-in rank table; roles not
    mentioned keep their default rank, so a partial table never drops the
    Director threshold that gates global access.

    ``missing_position_level`` is the level assumed for a target employee with
    no work position. The default of 1 keeps such employees modifiable by
    their team leader; set it to 3 or higher to lock them to managers.
    """

    role_ranks: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_ROLE_RANKS))
    missing_position_level: int = DEFAULT_MISSING_POSITION_LEVEL

    @field_validator("role_ranks")
    @classmethod
    def merge_over_default_ranks(cls, v: dict[str, int]) -> dict[str, int]:
        bad = sorted(name for name, rank in v.items() if rank <= 0)
        if bad:
            raise ValueError(f"Role ranks must be positive (0 is reserved for unknown roles): {bad}")
        return {**DEFAULT_ROLE_RANKS, **v}

    def hierarchy(self) -> RoleHierarchy:
        return RoleHierarchy(self.role_ranks)


class Config(BaseSettings):
    server: Server = Server()
    logging: LoggingConfig = LoggingConfig()
    authorization: AuthorizationConfig = AuthorizationConfig()

    model_config = {
        "env_prefix": "SAT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # SAT_AUTHORIZATION__MISSING_POSITION_LEVEL=3
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Explicit values, then environment, then .env, then YAML, then secrets."""
        yaml_settings = YamlConfigSettingsSource(settings_cls)
        return init_settings, env_settings, dotenv_settings, yaml_settings, file_secret_settings


def _make_handler(config: LoggingConfig) -> logging.Handler:
    if not config.file:
        return logging.StreamHandler(sys.stderr)
    log_path = Path(config.file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_path)


def configure_logging(config: LoggingConfig) -> None:
    """Install a single root handler at the configured level.

    Call once at startup, before the authorization service is built, so the
    allow/deny audit lines reach the configured destination.
    """
    handler = _make_handler(config)
    handler.setLevel(config.level)
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured: level=%s file=%s", config.level, config.file)
