"""
Configuration settings for ARP Warden.

Module-level values are the defaults; a YAML file loaded with
load_config() overrides them for a single run.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import yaml


# =============================================================================
# Neighbor Table Settings
# =============================================================================
# Kernel ARP table (IP, HW type, Flags, HW address, Mask, Device)
NEIGHBOR_TABLE_PATH = "/proc/net/arp"

# MAC reported for entries whose resolution has not completed
INCOMPLETE_MAC = "00:00:00:00:00:00"

# Keyword matching every interface in denylist/allowlist scopes
ALL_INTERFACES = "all"

# =============================================================================
# File Locations
# =============================================================================
CONFIG_DIR = "/etc/arpwarden"
DEFAULT_CONFIG_PATH = os.path.join(CONFIG_DIR, "arpwarden.yaml")
STATIC_BINDINGS_PATH = os.path.join(CONFIG_DIR, "static.list")
DENYLIST_PATH = os.path.join(CONFIG_DIR, "denylist")
ALLOWLIST_PATH = os.path.join(CONFIG_DIR, "allowlist")
PID_FILE = "/run/arpwarden.pid"

# =============================================================================
# Detection Settings
# =============================================================================
# Seconds between neighbor table samples
NORMAL_INTERVAL = 60.0
ATTACK_INTERVAL = 10.0

# Neighbor rows per interface (incomplete included) before a scan alarm
SCAN_THRESHOLD = 50

# Seconds a hook script may run before it is killed
HOOK_TIMEOUT = 30.0

# Hook keys accepted under `hooks:` in the config file
HOOK_KEYS = ("mismatch", "unknown", "denylisted", "allowlisted", "learned", "scan")

# =============================================================================
# Logging Settings
# =============================================================================
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Event logs hold one line per event
EVENT_LOG_FORMAT = "%(asctime)s %(message)s"
EVENT_LOG_KEYS = ("general", "denylist", "allowlist", "scan")


class ConfigurationError(Exception):
    """Raised when the configuration cannot be used to start a run."""


def _as_interface_list(value, key: str) -> List[str]:
    """Accept a YAML list or a comma/space separated string of names."""
    if value is None:
        return []
    if isinstance(value, str):
        return [name for name in value.replace(',', ' ').split() if name]
    if isinstance(value, (list, tuple)):
        return [str(name).strip() for name in value if str(name).strip()]
    raise ConfigurationError(f"{key}: expected a list of interface names")


def _as_seconds(value, key: str) -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key}: expected a number of seconds, got {value!r}")
    return seconds


def _section(data: Dict, key: str) -> Dict:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"{key}: expected a mapping")
    return section


@dataclass
class MonitorConfig:
    """Everything a monitor run needs, after defaults and overrides."""
    neighbor_table: str = NEIGHBOR_TABLE_PATH

    # Binding groups
    static_interfaces: List[str] = field(default_factory=list)
    static_bindings: str = STATIC_BINDINGS_PATH
    dynamic_interfaces: List[str] = field(default_factory=list)
    dynamic_state_file: Optional[str] = None

    # MAC rules
    denylist: str = DENYLIST_PATH
    allowlist: str = ALLOWLIST_PATH

    # Scan detection
    scan_interfaces: List[str] = field(default_factory=list)
    scan_threshold: int = SCAN_THRESHOLD

    # Polling cadence
    normal_interval: float = NORMAL_INTERVAL
    attack_interval: float = ATTACK_INTERVAL

    # Notification hooks, keyed by HOOK_KEYS
    hooks: Dict[str, str] = field(default_factory=dict)
    hook_timeout: float = HOOK_TIMEOUT

    pid_file: Optional[str] = PID_FILE

    # Logging
    log_level: str = LOG_LEVEL
    event_logs: Dict[str, str] = field(default_factory=dict)

    # Feature switches (command line)
    static_enabled: bool = True
    dynamic_enabled: bool = True
    denylist_enabled: bool = True
    allowlist_enabled: bool = True
    scan_enabled: bool = True
    color: bool = True

    def validate(self):
        """
        Check the configuration before the monitor starts.

        Raises:
            ConfigurationError: on an interface assigned to both static and
                dynamic mode, or on unusable intervals/threshold.
        """
        both = [name for name in self.static_interfaces
                if name in self.dynamic_interfaces]
        if both:
            raise ConfigurationError(
                "interface(s) assigned to both static and dynamic mode: "
                + ", ".join(sorted(set(both)))
            )
        if self.normal_interval <= 0 or self.attack_interval <= 0:
            raise ConfigurationError("polling intervals must be positive")
        if self.scan_threshold < 0:
            raise ConfigurationError("scan threshold must not be negative")
        if self.hook_timeout <= 0:
            raise ConfigurationError("hook timeout must be positive")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError(f"unknown log level: {self.log_level}")

    def apply_flags(
        self,
        no_color: bool = False,
        no_static: bool = False,
        no_dynamic: bool = False,
        no_denylist: bool = False,
        no_allowlist: bool = False,
        no_scan: bool = False
    ) -> 'MonitorConfig':
        """Switch off the features disabled on the command line."""
        if no_color:
            self.color = False
        if no_static:
            self.static_enabled = False
        if no_dynamic:
            self.dynamic_enabled = False
        if no_denylist:
            self.denylist_enabled = False
        if no_allowlist:
            self.allowlist_enabled = False
        if no_scan:
            self.scan_enabled = False
        return self

    @property
    def monitored_interfaces(self) -> List[str]:
        """All interfaces named anywhere in the configuration."""
        names = []
        for name in self.static_interfaces + self.dynamic_interfaces + self.scan_interfaces:
            if name not in names:
                names.append(name)
        return names

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'neighbor_table': self.neighbor_table,
            'static_interfaces': list(self.static_interfaces),
            'static_bindings': self.static_bindings,
            'dynamic_interfaces': list(self.dynamic_interfaces),
            'dynamic_state_file': self.dynamic_state_file,
            'denylist': self.denylist,
            'allowlist': self.allowlist,
            'scan_interfaces': list(self.scan_interfaces),
            'scan_threshold': self.scan_threshold,
            'normal_interval': self.normal_interval,
            'attack_interval': self.attack_interval,
            'hooks': dict(self.hooks),
            'hook_timeout': self.hook_timeout,
            'pid_file': self.pid_file,
            'log_level': self.log_level,
            'event_logs': dict(self.event_logs),
        }


def config_from_dict(data: Dict) -> MonitorConfig:
    """
    Build a MonitorConfig from a parsed YAML mapping.

    Unknown top-level keys are ignored. Omitted keys keep their defaults.
    """
    if not isinstance(data, dict):
        raise ConfigurationError("configuration must be a mapping")

    config = MonitorConfig()

    if 'neighbor_table' in data:
        config.neighbor_table = str(data['neighbor_table'])

    static = _section(data, 'static')
    config.static_interfaces = _as_interface_list(static.get('interfaces'), 'static.interfaces')
    if static.get('bindings'):
        config.static_bindings = str(static['bindings'])

    dynamic = _section(data, 'dynamic')
    config.dynamic_interfaces = _as_interface_list(dynamic.get('interfaces'), 'dynamic.interfaces')
    if dynamic.get('state_file'):
        config.dynamic_state_file = str(dynamic['state_file'])

    if 'denylist' in data:
        config.denylist = str(data['denylist']) if data['denylist'] else ''
    if 'allowlist' in data:
        config.allowlist = str(data['allowlist']) if data['allowlist'] else ''

    scan = _section(data, 'scan')
    config.scan_interfaces = _as_interface_list(scan.get('interfaces'), 'scan.interfaces')
    if 'threshold' in scan:
        try:
            config.scan_threshold = int(scan['threshold'])
        except (TypeError, ValueError):
            raise ConfigurationError(f"scan.threshold: expected an integer, got {scan['threshold']!r}")

    interval = _section(data, 'interval')
    if 'normal' in interval:
        config.normal_interval = _as_seconds(interval['normal'], 'interval.normal')
    if 'attack' in interval:
        config.attack_interval = _as_seconds(interval['attack'], 'interval.attack')

    hooks = _section(data, 'hooks')
    for key, path in hooks.items():
        if key not in HOOK_KEYS:
            raise ConfigurationError(
                f"hooks.{key}: unknown hook (expected one of {', '.join(HOOK_KEYS)})"
            )
        if path:
            config.hooks[key] = str(path)
    if 'hook_timeout' in data:
        config.hook_timeout = _as_seconds(data['hook_timeout'], 'hook_timeout')

    if 'pid_file' in data:
        config.pid_file = str(data['pid_file']) if data['pid_file'] else None

    logging_section = _section(data, 'logging')
    if logging_section.get('level'):
        config.log_level = str(logging_section['level']).upper()
    for key in EVENT_LOG_KEYS:
        if logging_section.get(key):
            config.event_logs[key] = str(logging_section[key])

    return config


def load_config(path: Optional[str] = None) -> MonitorConfig:
    """
    Load the monitor configuration.

    Args:
        path: YAML file to read. None reads DEFAULT_CONFIG_PATH when it
            exists and falls back to built-in defaults otherwise.

    Returns:
        A validated MonitorConfig.

    Raises:
        ConfigurationError: if an explicit file is missing or unreadable,
            the YAML is malformed, or validation fails.
    """
    if path is None:
        if not os.path.exists(DEFAULT_CONFIG_PATH):
            config = MonitorConfig()
            config.validate()
            return config
        path = DEFAULT_CONFIG_PATH

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"cannot read configuration {path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"malformed configuration {path}: {e}")

    config = config_from_dict(data)
    config.validate()
    return config
