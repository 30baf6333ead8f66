import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

ROLLUP_URL_ENV = "ROLLUP_HTTP_SERVER_URL"
DEFAULT_CONFIG_PATH = Path("dapp_config.yaml")


class ConfigError(Exception):
    pass


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class NodeConfig:
    rollup_server_url: str
    request_timeout: Optional[float] = None
    idle_sleep: float = 0.0
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _load_yaml(yaml_path: Path) -> Dict[str, Any]:
    """Return dict from YAML, or empty dict if the file is missing."""
    if not yaml_path.exists():
        return {}
    try:
        data = yaml.safe_load(yaml_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML config {yaml_path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {yaml_path} must be a mapping")
    return data


def load_config(
    config_path: str | Path | None = None,
    *,
    rollup_url: Optional[str] = None,
    log_level: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None,
) -> NodeConfig:
    """
    Builds the node configuration. Precedence, lowest first: YAML file,
    ROLLUP_HTTP_SERVER_URL, explicit arguments.
    """
    env = os.environ if environ is None else environ
    yaml_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    y = _load_yaml(yaml_path.expanduser())

    url = rollup_url or env.get(ROLLUP_URL_ENV) or y.get("rollup_server_url")
    if not url:
        raise ConfigError(
            f"Rollup server URL missing: set {ROLLUP_URL_ENV}, --rollup-url "
            f"or rollup_server_url in {yaml_path}"
        )

    log_cfg = y.get("logging") or {}
    try:
        timeout = y.get("request_timeout")
        config = NodeConfig(
            rollup_server_url=str(url),
            request_timeout=float(timeout) if timeout is not None else None,
            idle_sleep=float(y.get("idle_sleep", 0.0) or 0.0),
            logging=LoggingConfig(
                level=str(log_level or log_cfg.get("level", "INFO")).upper(),
                file=log_cfg.get("file"),
            ),
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Invalid value in {yaml_path}: {e}") from e

    if config.request_timeout is not None and config.request_timeout <= 0:
        raise ConfigError(f"request_timeout must be positive or null, got {config.request_timeout}")
    if config.idle_sleep < 0:
        raise ConfigError(f"idle_sleep cannot be negative, got {config.idle_sleep}")
    return config
