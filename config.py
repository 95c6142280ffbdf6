"""YAML application configuration"""
import logging
from dataclasses import dataclass, field, fields
from typing import List, Optional

import yaml

from core.errors import ResourceLoadError

LOG = logging.getLogger("xrprofiles.config")

DEFAULT_LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


@dataclass
class AppConfig:
    registry_dir: Optional[str] = None
    assets_dir: Optional[str] = None
    store_path: Optional[str] = None
    strict: bool = False
    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    debug_modules: List[str] = field(default_factory=list)


def load_config(path: str) -> AppConfig:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ResourceLoadError(path, e) from e
    if not isinstance(data, dict):
        raise ResourceLoadError(path, "expected a mapping at the top level")

    known = {f.name for f in fields(AppConfig)}
    for key in sorted(set(data) - known):
        LOG.warning("unknown config key %r in %s", key, path)
    cfg = AppConfig(**{k: v for k, v in data.items() if k in known})
    cfg.strict = bool(cfg.strict)
    cfg.debug_modules = list(cfg.debug_modules or [])
    return cfg
