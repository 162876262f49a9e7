"""Geofence Configuration - Simple Configuration Management"""

import json
import logging
import math
import os
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigurationError, InvalidAddressError
from .validators import validate_ip_address, validate_radius, validate_sensitivity

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_URL = "https://api.ipbase.com/v2/info"
DEFAULT_CACHE_TTL = 86400        # 24 hours
DEFAULT_REQUEST_TIMEOUT = 10.0


class ProximityMode(Enum):
    """Proximity comparison strategies"""
    RADIUS = "radius"          # great-circle distance <= radius km
    PRECISION = "precision"    # legacy: coordinates equal after rounding


# ===============================================================================
# CONFIGURATION DATA CLASSES
# ===============================================================================

@dataclass(frozen=True)
class RedisOptions:
    """Connection parameters for the Redis verdict cache"""

    host: str = "localhost"
    port: int = 6379
    password: Optional[str] = None
    db: int = 0
    socket_timeout: float = 30.0
    socket_connect_timeout: float = 30.0

    def validate(self) -> None:
        if not self.host:
            raise ConfigurationError("redis host must not be empty", config_key='redis.host')
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 1 <= self.port <= 65535:
            raise ConfigurationError(f"invalid redis port {self.port!r}", config_key='redis.port')
        if isinstance(self.db, bool) or not isinstance(self.db, int) or self.db < 0:
            raise ConfigurationError(f"invalid redis db {self.db!r}", config_key='redis.db')
        for key in ('socket_timeout', 'socket_connect_timeout'):
            value = getattr(self, key)
            if value is not None and not value > 0:
                raise ConfigurationError(f"invalid redis {key} {value!r}", config_key=f'redis.{key}')


@dataclass(frozen=True)
class GeofenceConfig:
    """Main configuration settings

    ``ip_address`` is the anchor; an empty string geofences the public address
    of the machine running this code. Exactly one of ``radius`` (km) and
    ``sensitivity`` (0 - 5 decimal places) may be set; with neither, radius
    mode with a radius of 0 km is used.

    Sensitivity is for proximity:
        0 - 111 km
        1 - 11.1 km
        2 - 1.11 km
        3 - 111 meters
        4 - 11.1 meters
        5 - 1.11 meters

    ``cache_ttl`` is in seconds; zero or negative keeps verdicts forever.
    """

    ip_address: str = ""
    token: str = ""
    radius: Optional[float] = None
    sensitivity: Optional[int] = None
    allow_private_ip_addresses: bool = False
    cache_ttl: float = DEFAULT_CACHE_TTL
    redis: Optional[RedisOptions] = None
    provider_url: str = DEFAULT_PROVIDER_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def proximity_mode(self) -> ProximityMode:
        if self.sensitivity is not None:
            return ProximityMode.PRECISION
        return ProximityMode.RADIUS

    @property
    def effective_radius(self) -> float:
        return 0.0 if self.radius is None else float(self.radius)

    def validate(self) -> None:
        """Raise ConfigurationError describing the first invalid setting"""
        if self.radius is not None and self.sensitivity is not None:
            raise ConfigurationError(
                "radius and sensitivity are mutually exclusive; set only one",
                config_key='sensitivity',
            )
        if self.sensitivity is not None:
            validate_sensitivity(self.sensitivity)
        if self.radius is not None:
            validate_radius(self.radius)

        if self.ip_address:
            try:
                validate_ip_address(self.ip_address)
            except InvalidAddressError as e:
                raise ConfigurationError(e.message, config_key='ip_address') from e

        if isinstance(self.cache_ttl, bool) or not isinstance(self.cache_ttl, (int, float)) \
                or not math.isfinite(self.cache_ttl):
            raise ConfigurationError(
                f"invalid cache_ttl {self.cache_ttl!r}. value must be a finite number of seconds",
                config_key='cache_ttl',
            )
        if isinstance(self.request_timeout, bool) or not isinstance(self.request_timeout, (int, float)) \
                or not self.request_timeout > 0:
            raise ConfigurationError(
                f"invalid request_timeout {self.request_timeout!r}. value must be > 0",
                config_key='request_timeout',
            )
        if not self.provider_url:
            raise ConfigurationError("provider_url must not be empty", config_key='provider_url')
        if self.redis is not None:
            self.redis.validate()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeofenceConfig':
        """Build a config from a plain mapping, e.g. a parsed YAML file"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"unknown configuration keys: {', '.join(unknown)}",
                                     config_key=unknown[0])

        values = dict(data)
        redis_data = values.get('redis')
        if isinstance(redis_data, dict):
            redis_known = {f.name for f in fields(RedisOptions)}
            redis_unknown = sorted(set(redis_data) - redis_known)
            if redis_unknown:
                raise ConfigurationError(
                    f"unknown redis configuration keys: {', '.join(redis_unknown)}",
                    config_key=f"redis.{redis_unknown[0]}",
                )
            values['redis'] = RedisOptions(**redis_data)
        elif redis_data is not None and not isinstance(redis_data, RedisOptions):
            raise ConfigurationError("redis must be a mapping of connection options", config_key='redis')

        return cls(**values)


# ===============================================================================
# CONFIGURATION MANAGER
# ===============================================================================

class ConfigManager:
    """Loads a GeofenceConfig from a YAML/JSON file and applies overrides"""

    def __init__(self, config_path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None):
        self.config_path = config_path
        self.overrides = overrides or {}
        self.config = self._load_config()

    def _load_config(self) -> GeofenceConfig:
        """Load configuration from file and apply overrides"""
        data: Dict[str, Any] = {}
        if self.config_path:
            data = self._read_file(self.config_path)

        # Overrides (highest priority); None means "not given"
        for key, value in self.overrides.items():
            if value is None:
                continue
            if key == 'redis' and isinstance(value, dict):
                redis_values = {k: v for k, v in value.items() if v is not None}
                base = data.get('redis')
                if isinstance(base, dict):
                    data['redis'] = {**base, **redis_values}
                elif redis_values.get('host'):
                    data['redis'] = redis_values
                elif redis_values:
                    # Port, db or password alone never select the redis backend
                    logger.debug(f"Ignoring redis overrides without a host: {sorted(redis_values)}")
            else:
                data[key] = value

        try:
            config = GeofenceConfig.from_dict(data)
        except TypeError as e:
            raise ConfigurationError(f"invalid configuration: {e}", config_file=self.config_path) from e
        config.validate()
        return config

    def _read_file(self, path: str) -> Dict[str, Any]:
        if not os.path.exists(path):
            raise ConfigurationError(f"config file not found: {path}", config_file=path)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.endswith('.json'):
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f) or {}
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"failed to load config from {path}: {e}", config_file=path) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"config file {path} must contain a mapping", config_file=path)

        logger.debug(f"Loaded configuration from {path}")
        return data

    def get_config(self) -> GeofenceConfig:
        return self.config


def load_config(config_path: Optional[str] = None, **overrides: Any) -> GeofenceConfig:
    """Factory function to load and validate configuration"""
    return ConfigManager(config_path, overrides).get_config()
