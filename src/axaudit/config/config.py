"""
Configuration management for ax-audit using Pydantic.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, ClassVar, List, Optional, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from axaudit.constants import ACCEPT, DEFAULT_TIMEOUT_MS, PASS_THRESHOLD, USER_AGENT

log = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ("ax-audit.yaml", "ax-audit.yml")

# --- Nested Configuration Models ---


class FetcherConfig(BaseModel):
    """HTTP fetcher configuration."""

    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0, description="Per-request timeout in milliseconds.")
    user_agent: str = Field(default=USER_AGENT, description="User-Agent header sent with every request.")
    accept: str = Field(default=ACCEPT, description="Accept header sent with every request.")


class AuditConfig(BaseModel):
    """Audit selection and grading configuration."""

    checks: Optional[List[str]] = Field(default=None, description="Check ids to run. None runs every check.")
    pass_threshold: int = Field(default=PASS_THRESHOLD, ge=0, le=100, description="Minimum passing score.")
    max_concurrency: Optional[int] = Field(
        default=None, gt=0, description="Maximum audits running at once in batch mode. None is unbounded."
    )

    @field_validator("checks", mode="before")
    @classmethod
    def split_checks(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: Optional[str] = Field(default=None, description="Path to log file. If None, logs go to stderr.")
    json_logs: bool = Field(default=False, description="Render log events as JSON lines.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    audit: AuditConfig = Field(default_factory=AuditConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="AXAUDIT_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Reading %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("%s is empty, using default settings", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file(directory: Path | None = None) -> Path | None:
    current_dir = directory or Path.cwd()
    for name in CONFIG_FILE_NAMES:
        path = current_dir / name
        if path.is_file():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load configuration from an explicit path, a discovered file, or defaults."""
    config_path = path or find_config_file()
    if config_path:
        return Config.from_yaml(config_path)
    return Config()


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    Module-level settings resolved on first attribute access.

    A broken ax-audit.yaml in the working directory is logged and replaced by
    defaults instead of failing at import time.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        cls = type(self)
        if cls._config is None:
            with cls._lock:
                if cls._config is None:
                    cls._config = self._resolve()
        return getattr(cls._config, name)

    def _resolve(self) -> Config:
        config_path = find_config_file()
        if config_path is None:
            log.debug("No ax-audit config file in %s, using defaults", Path.cwd())
            return Config()
        try:
            log.info("Loading settings from %s", config_path)
            return Config.from_yaml(config_path)
        except (ValidationError, FileNotFoundError, yaml.YAMLError) as e:
            log.error(
                "Ignoring invalid config file %s: %s",
                config_path,
                e,
                exc_info=log.getEffectiveLevel() <= logging.DEBUG,
            )
            return Config()


settings: "Config" = cast("Config", LazyConfig())
