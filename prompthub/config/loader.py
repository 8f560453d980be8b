"""Load prompthub configuration from disk and environment"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from .schema import Config
from .validator import ConfigValidator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PROMPTHUB_CONFIG"
DATA_DIR_ENV_VAR = "PROMPTHUB_DATA_DIR"


def default_config_path() -> Path:
    return Path.home() / ".config" / "prompthub" / "config.json"


def _read_raw_config(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {path}: expected a JSON object")
        return {}
    return data


def load_config(path: Optional[Path] = None) -> Config:
    """Build the configuration.

    Precedence: ``PROMPTHUB_DATA_DIR`` env var, then the JSON config file
    (``path``, ``PROMPTHUB_CONFIG`` or ~/.config/prompthub/config.json), then
    defaults. An invalid file is reported and replaced by defaults.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        path = Path(env_path).expanduser() if env_path else default_config_path()

    raw = _read_raw_config(path)

    data_dir = os.environ.get(DATA_DIR_ENV_VAR)
    if data_dir:
        raw.setdefault("storage", {})
        if isinstance(raw["storage"], dict):
            raw["storage"]["data_dir"] = str(Path(data_dir).expanduser())

    is_valid, errors = ConfigValidator.validate_config(raw)
    if not is_valid:
        for error in errors:
            logger.warning(f"Invalid config value in {path}: {error}")
        config = Config()
        if data_dir:
            config.storage.data_dir = Path(data_dir).expanduser()
        return config

    for warning in ConfigValidator.validate_http_config(raw.get("http", {})):
        logger.debug(warning)

    return Config(**raw)
