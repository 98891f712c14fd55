"""Scheduler configuration using Pydantic, loaded from TOML and environment."""

import logging
import math
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator

logger = logging.getLogger(__name__)

CONFIG_SECTION = "interval_async"

ENV_VARS = {
    "min_interval_ms": "INTERVAL_ASYNC_MIN_INTERVAL_MS",
    "max_interval_ms": "INTERVAL_ASYNC_MAX_INTERVAL_MS",
    "log_failures": "INTERVAL_ASYNC_LOG_FAILURES",
}


class IntervalConfig(BaseModel):
    """Root configuration model.

    Interval bounds are opt-in. With both unset any finite interval is
    accepted, and the timer treats negative values as zero.
    """

    min_interval_ms: float | None = None
    max_interval_ms: float | None = None
    # Report handler failures through observers.log_failure when no
    # explicit observer is given
    log_failures: bool = False

    @model_validator(mode="after")
    def _check_bounds(self) -> "IntervalConfig":
        low, high = self.min_interval_ms, self.max_interval_ms
        for name, value in (("min_interval_ms", low), ("max_interval_ms", high)):
            if value is not None and not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
        if low is not None and high is not None and low > high:
            raise ValueError(f"min_interval_ms ({low}) exceeds max_interval_ms ({high})")
        return self


def _resolve_env(config: dict[str, Any]) -> dict[str, Any]:
    """Fill values from environment variables where not set in config."""
    for key, env_var in ENV_VARS.items():
        if config.get(key) is None:
            value = os.environ.get(env_var)
            if value:
                config[key] = value
    return config


def load_config(path: Path | None = None) -> IntervalConfig:
    """Load configuration from a TOML file and the environment.

    Args:
        path: Config file to read. Settings live in an [interval_async]
            table, or at the top level if the file has no such table.
            If None, only defaults and environment variables apply.

    Returns:
        Validated IntervalConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ValueError: If the config file or environment values are invalid.
    """
    raw_config: dict[str, Any] = {}

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with config_path.open("rb") as f:
            document = tomllib.load(f)
        section = document.get(CONFIG_SECTION, document)
        if not isinstance(section, dict):
            raise ValueError(f"[{CONFIG_SECTION}] must be a table")
        raw_config = dict(section)
        logger.debug("config_loaded", extra={"file.path": str(config_path)})

    return IntervalConfig.model_validate(_resolve_env(raw_config))
