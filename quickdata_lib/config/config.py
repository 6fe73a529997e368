from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional
import logging
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('data/config/quickdata.yml')


@dataclass
class Config:
    data_dir: str = "data"
    store_name: str = "DataInfo"
    # 'file' or 'memory'
    storage_backend: str = "file"
    # 'asyncio', 'timer' or 'manual'
    scheduler: str = "asyncio"
    # seconds; only used by the timer scheduler
    save_delay: float = 0.0
    log_level: str = "WARNING"


def read_settings(config_path: Optional[Path] = None) -> dict:
    """Read the YAML settings file and return its mapping.

    A missing file yields an empty dict. A file that does not parse, or does
    not hold a mapping, is logged and treated as empty.
    """
    cfg_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        return {}
    try:
        with cfg_path.open('r', encoding='utf-8') as f:
            data: Any = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.warning('Failed to parse %s, using defaults: %s', cfg_path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning('Ignoring %s: expected a mapping', cfg_path)
        return {}
    return data


def load_config(config_path: Optional[Path] = None, base: Optional[Config] = None) -> Config:
    """Return `base` (or defaults) overridden by known keys from the settings file."""
    cfg = base or Config()
    settings = read_settings(config_path)
    known = {f.name for f in fields(Config)}
    overrides = {k: v for k, v in settings.items() if k in known}
    unknown = sorted(set(settings) - known)
    if unknown:
        logger.debug('Ignoring unknown config keys: %s', ', '.join(unknown))
    return replace(cfg, **overrides)
