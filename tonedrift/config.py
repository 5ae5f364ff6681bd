"""Configuration loading for tonedrift.

Settings come from ``~/.config/tonedrift/config.toml`` with environment
variables taking precedence. A missing or unreadable file yields defaults.
"""

import logging
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

from tonedrift.agents.base import DEFAULT_BASE_URL, DEFAULT_MODEL, CompletionClient

logger = logging.getLogger(__name__)


CONFIG_DIR = Path.home() / ".config" / "tonedrift"
CONFIG_PATH = CONFIG_DIR / "config.toml"

# Checked in order; the first non-empty value wins
API_KEY_ENV_VARS = ("TONEDRIFT_API_KEY", "XAI_API_KEY")


class Settings(BaseModel):
    """Resolved runtime settings."""

    api_key: Optional[str] = Field(default=None, repr=False, description="Endpoint credential")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="OpenAI-compatible API base URL")
    model: str = Field(default=DEFAULT_MODEL, description="Chat model name")
    extraction: Literal["greedy", "balanced"] = Field(
        default="greedy", description="JSON extraction strategy"
    )

    model_config = {"frozen": True}

    def client(self) -> CompletionClient:
        """Construct the completion client these settings describe."""
        return CompletionClient(api_key=self.api_key, base_url=self.base_url, model=self.model)


def _read_config(path: Path) -> dict:
    """Load the TOML file, returning an empty dict on any problem."""
    import toml

    if not path.exists():
        return {}

    try:
        return toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}


def _text_setting(section: dict, key: str) -> Optional[str]:
    """Return a non-empty string value from a config section, else None."""
    value = section.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        logger.warning("Ignoring non-string llm.%s in config", key)
        return None
    return value


def load_settings(path: Optional[Path] = None) -> Settings:
    """Resolve settings from the config file and environment.

    Args:
        path: Config file path. Defaults to CONFIG_PATH.

    Returns:
        Settings instance. Never raises for missing credentials.
    """
    config = _read_config(path or CONFIG_PATH)
    llm = config.get("llm") if isinstance(config.get("llm"), dict) else {}
    analysis = config.get("analysis") if isinstance(config.get("analysis"), dict) else {}

    api_key = next((os.environ[v] for v in API_KEY_ENV_VARS if os.environ.get(v)), None)
    if api_key is None:
        api_key = _text_setting(llm, "api_key")

    extraction = analysis.get("extraction", "greedy")
    if extraction not in ("greedy", "balanced"):
        logger.warning("Unknown extraction strategy %r, using greedy", extraction)
        extraction = "greedy"

    return Settings(
        api_key=api_key,
        base_url=os.environ.get("TONEDRIFT_BASE_URL") or _text_setting(llm, "base_url") or DEFAULT_BASE_URL,
        model=os.environ.get("TONEDRIFT_MODEL") or _text_setting(llm, "model") or DEFAULT_MODEL,
        extraction=extraction,
    )


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Returns:
        Path of the written file.
    """
    import toml

    config_path = path or CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "llm": {
            "api_key": "",  # Leave empty to use XAI_API_KEY env var
            "base_url": DEFAULT_BASE_URL,
            "model": DEFAULT_MODEL,
        },
        "analysis": {
            "extraction": "greedy",  # greedy or balanced
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path
