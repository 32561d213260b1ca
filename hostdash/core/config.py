#!/usr/bin/env python3
"""
hostdash Configuration Management

Resolution order (each later source overrides the earlier one):
1. Defaults below
2. YAML file: explicit path, else $HOSTDASH_CONFIG, else ./config.yaml
3. Environment (.env loaded via python-dotenv):
       HOSTDASH_API_URL, HOSTDASH_HOSTNAME, HOSTDASH_API_KEY
4. Command line arguments (see main.py), only when explicitly given

Configuration is resolved once at startup and passed by reference;
nothing re-reads it at runtime.
"""

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger("hostdash.config")

DEFAULT_CONFIG_PATH = "config.yaml"

# Environment variable -> config field
ENV_OVERRIDES = {
    "HOSTDASH_API_URL": "api_url",
    "HOSTDASH_HOSTNAME": "hostname",
    "HOSTDASH_API_KEY": "api_key",
}


class DashboardConfig(BaseModel):
    # Web server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    # Metrics API
    api_url: str = "http://localhost:8080"
    hostname: str = ""
    api_key: str = ""
    request_timeout: float = 10
    verify_tls: bool = True
    # Poller behavior
    interval: float = 10
    clear_on_error: bool = False     # drop the stale snapshot when a fetch fails
    skip_if_busy: bool = False       # skip a tick while a fetch is still in flight

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashboardConfig":
        """Create config from dictionary, ignoring unknown keys"""
        known_fields = set(cls.model_fields)
        unknown = sorted(k for k in data if k not in known_fields)
        if unknown:
            logger.warning("ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known_fields})

    def override_with_args(self, args: argparse.Namespace) -> "DashboardConfig":
        """Override config with command line arguments if provided"""
        for field in ("host", "port", "interval", "log_level"):
            value = getattr(args, field, None)
            if value is not None:
                setattr(self, field, value)
        return self

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.debug("config file not found: %s, using defaults", path)
        return {}
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must contain a mapping")
    logger.info("loaded configuration from %s", path)
    return data


def load_config(config_path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> DashboardConfig:
    """
    Build the dashboard configuration.

    Args:
        config_path: YAML file to read; falls back to $HOSTDASH_CONFIG, then ./config.yaml
        environ: Environment mapping to read overrides from (defaults to os.environ
            after loading .env)

    Returns:
        Resolved DashboardConfig
    """
    if environ is None:
        load_dotenv()
        environ = dict(os.environ)

    path = Path(config_path or environ.get("HOSTDASH_CONFIG") or DEFAULT_CONFIG_PATH)
    data = _read_yaml(path)

    for env_name, field in ENV_OVERRIDES.items():
        # empty variables (e.g. "HOSTDASH_API_KEY=" in .env) leave the file value alone
        value = environ.get(env_name)
        if value:
            data[field] = value

    config = DashboardConfig.from_dict(data)
    if not config.has_credential:
        logger.warning("HOSTDASH_API_KEY is not set; metrics will not be fetched")
    return config
