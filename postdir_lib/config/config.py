"""Server configuration loaded from YAML.

The file is optional: missing keys (or a missing file) fall back to the
defaults on `ServerConfig`. A few connection settings can be overridden
from the environment so containers need not ship a config file.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import logging
import os
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('data/config/server_config.yml')

ENV_OVERRIDES = {
    'POSTDIR_MONGO_URI': 'mongo_uri',
    'POSTDIR_DATABASE': 'database',
    'POSTDIR_COLLECTION': 'collection',
}


@dataclass
class ServerConfig:
    mongo_uri: str = 'mongodb://localhost:27017'
    database: str = 'mydb'
    collection: str = 'posts'
    host: str = '0.0.0.0'
    port: int = 50051
    log_level: str = 'INFO'
    server_selection_timeout_ms: int = 5000

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'ServerConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning('Ignoring unknown server config keys: %s', ', '.join(sorted(unknown)))
        cfg = cls(**{k: v for k, v in data.items() if k in known})
        cfg.port = int(cfg.port)
        cfg.server_selection_timeout_ms = int(cfg.server_selection_timeout_ms)
        return cfg


def load_server_config(config_path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Load the server config from `config_path` and apply env overrides.

    Raises ValueError when the file exists but is not a YAML mapping.
    """
    cfg_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        with cfg_path.open('r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f'Server config {cfg_path} must be a YAML mapping')
        data.update(loaded)
        logger.debug('Loaded server config from %s', cfg_path)
    else:
        logger.debug('No server config at %s; using defaults', cfg_path)

    env = os.environ if environ is None else environ
    for var, key in ENV_OVERRIDES.items():
        if env.get(var):
            data[key] = env[var]
    return ServerConfig.from_mapping(data)


def render_template() -> str:
    """Return the default config as human-editable YAML."""
    return yaml.safe_dump(ServerConfig().to_dict(), sort_keys=False)
