"""
Configuration loader for the Hue platform
Loads the YAML configuration file and resolves the raw platform options
into a typed PlatformConfig record
"""

import yaml
import logging
import math
from typing import Dict, Any, Mapping, Optional, Tuple, FrozenSet
from types import MappingProxyType
from dataclasses import dataclass, field
from pathlib import Path
from datetime import datetime
import pytz

logger = logging.getLogger(__name__)

DEFAULT_HEARTRATE = 5
DEFAULT_TIMEOUT = 5

# Deprecated option -> replacement
DEPRECATED_ALL_LIGHTS_KEYS = ('alllights', 'legacy-all-lights')
DEPRECATED_CLIP_SENSORS_KEYS = ('clipsensors', 'legacy-clip-sensors')
CLIP_SENSOR_TYPES = ('CLIP', 'Geofence')


@dataclass(frozen=True)
class PlatformConfig:
    """Resolved platform options, all defaults applied"""
    name: str = "Hue"
    heartrate: float = DEFAULT_HEARTRATE        # seconds
    timeout: int = DEFAULT_TIMEOUT * 1000       # milliseconds
    users: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    hosts: Optional[Tuple[str, ...]] = None
    exclude_sensor_types: FrozenSet[str] = frozenset()
    lights: bool = False
    philips_lights: bool = False
    ct: bool = False
    fake_color: bool = False
    groups: bool = False
    group0: bool = True
    rooms: bool = True
    sensors: bool = False
    schedules: bool = False
    rules: bool = False

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000


def _positive_number(value: Any, default: float) -> float:
    if (isinstance(value, bool) or not isinstance(value, (int, float))
            or not math.isfinite(value) or value <= 0):
        return default
    return value

def resolve_config(raw: Optional[Mapping[str, Any]]) -> PlatformConfig:
    """
    Normalize raw platform options into a PlatformConfig
    Never fails: unknown keys are ignored, malformed values fall back to defaults
    """
    if not isinstance(raw, Mapping):
        raw = {}

    philips_lights = bool(raw.get('philips-lights', raw.get('philipslights', False)))
    for old_key in DEPRECATED_ALL_LIGHTS_KEYS:
        if old_key in raw:
            logger.warning(f'config: "{old_key}" has been deprecated, use "philipslights" instead')
            philips_lights = bool(raw[old_key])

    exclude_sensor_types = set()
    raw_excludes = raw.get('excludeSensorTypes')
    if isinstance(raw_excludes, (list, tuple)):
        exclude_sensor_types.update(str(sensor_type) for sensor_type in raw_excludes)
    for old_key in DEPRECATED_CLIP_SENSORS_KEYS:
        if raw.get(old_key) is False:
            logger.warning(f'config: "{old_key}" has been deprecated, use "excludeSensorTypes" instead')
            exclude_sensor_types.update(CLIP_SENSOR_TYPES)

    hosts = None
    raw_host = raw.get('host')
    if isinstance(raw_host, (list, tuple)):
        hosts = []
        for host in raw_host:
            if not host:
                logger.warning(f"config: ignoring empty host entry {host!r}")
                continue
            hosts.append(str(host))
        hosts = tuple(hosts)
    elif raw_host:
        hosts = (str(raw_host),)

    users = raw.get('users')
    if not isinstance(users, Mapping):
        users = {}
    usernames = {}
    for bridge_id, username in users.items():
        if username is None or username == '':
            logger.warning(f"config: ignoring empty username for bridge {bridge_id}")
            continue
        usernames[str(bridge_id).upper()] = str(username)

    timeout = _positive_number(raw.get('timeout'), DEFAULT_TIMEOUT)

    return PlatformConfig(
        name=str(raw.get('name') or "Hue"),
        heartrate=_positive_number(raw.get('heartrate'), DEFAULT_HEARTRATE),
        timeout=int(timeout * 1000),
        users=MappingProxyType(usernames),
        hosts=hosts,
        exclude_sensor_types=frozenset(exclude_sensor_types),
        lights=bool(raw.get('lights', False)),
        philips_lights=philips_lights,
        ct=bool(raw.get('ct', False)),
        fake_color=bool(raw.get('fakecolor', False)),
        groups=bool(raw.get('groups', False)),
        group0=raw.get('group0') is not False,
        rooms=raw.get('rooms') is not False,
        sensors=bool(raw.get('sensors', False)),
        schedules=bool(raw.get('schedules', False)),
        rules=bool(raw.get('rules', False)),
    )

def load_config(config_path: str = "config/config.yaml") -> Dict[str, Any]:
    """
    Load configuration from YAML file with validation
    """
    try:
        config_file = Path(config_path)
        if not config_file.exists():
            logger.error(f"Configuration file not found: {config_path}")
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r') as f:
            config = yaml.safe_load(f) or {}

        _validate_config(config)

        config = _apply_defaults(config)

        logger.info(f"Configuration loaded from {config_path}")
        return config

    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        raise

def _validate_config(config: Dict) -> None:
    """Validate that required configuration sections exist"""
    if not isinstance(config, dict):
        raise ValueError("Configuration root must be a mapping")

    if 'hue' not in config:
        raise ValueError("Missing required configuration section: hue")

def _apply_defaults(config: Dict) -> Dict:
    """Apply default values to configuration"""
    if config['hue'] is None:
        config['hue'] = {}

    if not config.get('logging'):
        config['logging'] = {}
    logging_defaults = {
        'level': 'INFO',
        'file': None,
        'console_output': True,
        'timezone': 'UTC'
    }
    for key, default_value in logging_defaults.items():
        if key not in config['logging']:
            config['logging'][key] = default_value

    return config


class TimezoneFormatter(logging.Formatter):
    """Formatter that renders timestamps in a configured timezone"""

    def __init__(self, fmt=None, timezone_name: str = 'UTC'):
        super().__init__(fmt)
        try:
            self.tz = pytz.timezone(timezone_name)
        except pytz.UnknownTimeZoneError:
            logger.warning(f"Unknown timezone {timezone_name!r}, using UTC")
            self.tz = pytz.utc

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, tz=self.tz)
        if datefmt:
            return dt.strftime(datefmt)
        else:
            # Default format: YYYY-MM-DD HH:MM:SS TZ
            return dt.strftime('%Y-%m-%d %H:%M:%S %Z')

def setup_logging(config: Dict) -> None:
    """Setup logging based on configuration"""
    log_config = config.get('logging', {})
    level = log_config.get('level', 'INFO')

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = TimezoneFormatter(log_format, log_config.get('timezone', 'UTC'))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=log_format,
        handlers=[]
    )

    if log_config.get('console_output', True):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logging.getLogger().addHandler(console_handler)

    log_file = log_config.get('file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)

    logger.info(f"Logging configured: level={level}, console={log_config.get('console_output', True)}, file={log_file}")

def get_sample_config() -> Dict:
    """Return a sample configuration for reference"""
    return {
        "hue": {
            "name": "Hue",
            "host": ["10.0.0.5"],
            "users": {
                "001788FFFE123456": "your-bridge-username-here"
            },
            "heartrate": 5,
            "timeout": 5,
            "lights": True,
            "groups": False,
            "group0": True,
            "rooms": True,
            "sensors": True,
            "excludeSensorTypes": ["CLIP", "Geofence"],
            "schedules": False,
            "rules": False
        },
        "logging": {
            "level": "INFO",
            "file": "logs/hue_platform.log",
            "console_output": True,
            "timezone": "UTC"
        }
    }
