"""
Configuration loader for the Dwolla client
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
import logging

from dwift.integrations.contracts.keys import Paths

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "client_config.yml"

ENV_OVERRIDES = {
    "DWOLLA_TOKEN": "token",
    "DWOLLA_HOST": "host",
    "DWOLLA_PIN": "pin",
    "DWOLLA_TIMEOUT_SECONDS": "timeout_seconds",
}


class ClientConfig(BaseModel):
    """Dwolla client configuration"""

    token: str = Field(min_length=1)
    host: str = Paths.HOST
    pin: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)


def load_client_config(config_path: Optional[Path] = None) -> ClientConfig:
    """
    Load and validate client configuration

    Values come from the YAML file (if present), then environment variables
    (including a .env file) override them.

    Args:
        config_path: Path to config file. Defaults to config/client_config.yml

    Returns:
        Validated ClientConfig object

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    config_data: Dict[str, Any] = {}
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    path = config_path or DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
        logger.debug(f"Read client config from {path}")

    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config_data[key] = value

    try:
        config = ClientConfig(**config_data)
        logger.info(f"Loaded client config for host {config.host}")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise
