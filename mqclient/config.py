"""
Configuration loading for applications built on mqclient.

The core client takes its parameters as constructor arguments. This module
reads them from a YAML file shaped like:

    broker:
      host: 127.0.0.1
      port: 5000
      app_id: 3f2504e0-4f89-11d3-9a0c-0305e82c3301
      timeout: 5.0
    logging:
      level: INFO
      file: mqclient.log
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Optional

import yaml

from .api import MQClient
from .exceptions import ConfigurationError


@dataclass
class BrokerConfig:
    """Broker connection settings"""
    host: str
    port: int
    app_id: Optional[uuid.UUID] = None
    timeout: Optional[float] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def create_client(self, **kwargs) -> MQClient:
        """Build a client; a random application id is used when none is configured"""
        app_id = self.app_id if self.app_id is not None else uuid.uuid4()
        return MQClient(self.host, self.port, app_id, timeout=self.timeout, **kwargs)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "BrokerConfig":
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a mapping")

        broker = config.get("broker")
        if not isinstance(broker, dict):
            raise ConfigurationError("Missing 'broker' section in configuration")

        missing = [f for f in ("host", "port") if f not in broker]
        if missing:
            raise ConfigurationError(f"Missing broker config fields: {', '.join(missing)}")

        host = broker["host"]
        if not isinstance(host, str) or not host.strip():
            raise ConfigurationError(f"Invalid broker host: {host!r}")

        port = broker["port"]
        if isinstance(port, bool) or not isinstance(port, int) or port < 1 or port > 65535:
            raise ConfigurationError(f"Invalid broker port: {port!r}")

        app_id = broker.get("app_id")
        if app_id is not None:
            try:
                app_id = uuid.UUID(str(app_id))
            except ValueError:
                raise ConfigurationError(f"Invalid broker app_id: {app_id!r}")

        timeout = broker.get("timeout")
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigurationError(f"Invalid broker timeout: {timeout!r}")
            timeout = float(timeout)

        log_config = config.get("logging") or {}
        if not isinstance(log_config, dict):
            raise ConfigurationError("'logging' section must be a mapping")
        log_level = str(log_config.get("level", "INFO")).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"Invalid log level: {log_level}")

        return cls(
            host=host,
            port=port,
            app_id=app_id,
            timeout=timeout,
            log_level=log_level,
            log_file=log_config.get("file"),
        )


def load_config(path: str) -> BrokerConfig:
    """Load broker settings from a YAML file"""
    try:
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse config file {path}: {e}") from e
    return BrokerConfig.from_dict(config)
