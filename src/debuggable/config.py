"""Configuration management for debuggable dispatchers.

Three-layer config resolution (highest priority wins):
  1. Explicit overrides - keyword arguments passed by the application
  2. Project config - .debuggable.json in the working directory or a parent
  3. Global config - ~/.debuggable/config.json

Recognised keys:
    name                 dispatcher name
    enable               dispatcher enable flag
    min_logger_level     dispatcher floor (level name or rank)
    bundle_identifier    application tag (defaults to the host app)
    color                colour preset name ('linux', 'default', 'none')
    services             list of service specs or service dicts

Service spec syntax (compact, positional):
    NAME:LEVEL:STATE:CONTEXTS

    Examples:
        console                 # All defaults (level=error, on)
        console:warning         # Warning floor
        console:verbose:off     # Registered but disabled
        console:debug:on:net,db # Only the 'net' and 'db' contexts
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Union

from .context import LoggerContext
from .factory import LoggerServiceFactory
from .formatting import get_color_configuration
from .levels import LoggerLevel, parse_level
from .logger_queue import LoggerQueue
from .service import ConsoleLoggerService

CONFIG_KEYS = ["name", "enable", "min_logger_level", "bundle_identifier",
               "color", "services"]

DEFAULTS: Dict[str, Any] = {
    "name": "debuggable",
    "enable": True,
    "min_logger_level": "fatal_error",
    "color": None,
    "services": ["console"],
}


# ---------------------------------------------------------------------------
# Config file locations
# ---------------------------------------------------------------------------
def get_global_config_dir():
    """Return the global config directory (~/.debuggable/)."""
    return Path.home() / ".debuggable"


def get_global_config_path():
    """Return path to the global config file."""
    return get_global_config_dir() / "config.json"


def find_project_config(start_dir=None):
    """Walk up from start_dir looking for .debuggable.json.

    Returns the path if found, None otherwise.
    """
    current = Path(start_dir or os.getcwd()).resolve()
    for _ in range(20):  # safety limit
        candidate = current / ".debuggable.json"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_json(path):
    """Load a JSON file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, IsADirectoryError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global_config():
    """Load the global config file."""
    return load_json(get_global_config_path())


def load_project_config(start_dir=None):
    """Load the nearest .debuggable.json walking upward from start_dir."""
    path = find_project_config(start_dir)
    if path:
        return load_json(path), path
    return {}, None


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
def _lookup(cfg, key):
    """Find `key` in a JSON dict accepting snake_case or kebab-case."""
    for candidate in (key, key.replace("_", "-")):
        if candidate in cfg and cfg[candidate] is not None:
            return cfg[candidate]
    return None


def resolve_config(overrides=None, keys=None, start_dir=None):
    """Resolve config values using three-layer precedence.

    For each key in `keys`, checks (in order):
      1. `overrides` (a dict; None values are skipped)
      2. Project .debuggable.json
      3. Global ~/.debuggable/config.json

    Returns a dict with resolved values (None when no layer sets a key).
    """
    if keys is None:
        keys = CONFIG_KEYS
    overrides = overrides or {}

    project_cfg, _ = load_project_config(start_dir)
    global_cfg = load_global_config()

    resolved = {}
    for key in keys:
        key = key.replace("-", "_")
        if overrides.get(key) is not None:
            resolved[key] = overrides[key]
            continue
        proj_val = _lookup(project_cfg, key)
        if proj_val is not None:
            resolved[key] = proj_val
            continue
        resolved[key] = _lookup(global_cfg, key)

    return resolved


# ---------------------------------------------------------------------------
# Service specs
# ---------------------------------------------------------------------------
@dataclass
class ServiceConfig:
    """Configuration for a single sink."""
    name: str
    level: LoggerLevel = LoggerLevel.ERROR
    enabled: bool = True
    contexts: FrozenSet[str] = field(default_factory=frozenset)


_STATES = {"on": True, "true": True, "1": True, "enabled": True,
           "off": False, "false": False, "0": False, "disabled": False}


def _parse_state(value):
    if isinstance(value, bool):
        return value
    try:
        return _STATES[str(value).strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown service state: {value!r}") from None


def parse_service_spec(spec: str) -> ServiceConfig:
    """Parse a service spec string into a ServiceConfig.

    Handles the compact positional syntax:
        NAME:LEVEL:STATE:CONTEXTS

    Empty slots use :: (empty between colons).

    Args:
        spec: Service spec string like "console:warning" or "console::off"

    Returns:
        ServiceConfig with parsed values

    Raises:
        ValueError: on an empty name, unknown level or unknown state
    """
    parts = spec.split(':')

    name = parts[0].strip() if parts else ''
    if not name:
        raise ValueError(f"Service spec has no name: {spec!r}")
    cfg = ServiceConfig(name=name)

    if len(parts) > 1 and parts[1]:
        cfg.level = parse_level(parts[1])
    if len(parts) > 2 and parts[2]:
        cfg.enabled = _parse_state(parts[2])
    if len(parts) > 3 and parts[3]:
        cfg.contexts = frozenset(c.strip() for c in parts[3].split(',') if c.strip())

    return cfg


def service_config_from(value: Union[str, Dict[str, Any], ServiceConfig]) -> ServiceConfig:
    """Accept a spec string, a JSON dict or a ServiceConfig."""
    if isinstance(value, ServiceConfig):
        return value
    if isinstance(value, str):
        return parse_service_spec(value)
    if isinstance(value, dict):
        name = value.get("name")
        if not name:
            raise ValueError(f"Service entry has no name: {value!r}")
        cfg = ServiceConfig(name=name)
        level = _lookup(value, "level")
        if level is not None:
            cfg.level = parse_level(level)
        enabled = _lookup(value, "enabled")
        if enabled is not None:
            cfg.enabled = _parse_state(enabled)
        contexts = _lookup(value, "contexts")
        if contexts:
            cfg.contexts = frozenset(contexts)
        return cfg
    raise ValueError(f"Unsupported service entry: {value!r}")


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------
def build_from_config(start_dir=None, queue: Optional[LoggerQueue] = None,
                      file=None, **overrides):
    """Build a dispatcher with console sinks from resolved configuration.

    Args:
        start_dir: Directory to start the .debuggable.json search from
        queue: Execution queue for the dispatcher
        file: Output stream for the console sinks (default stdout)
        **overrides: Highest-priority config values (see CONFIG_KEYS)

    Returns:
        A LoggerServiceDefault with one ConsoleLoggerService per service.
    """
    resolved = resolve_config(overrides, start_dir=start_dir)
    for key, default in DEFAULTS.items():
        if resolved.get(key) is None:
            resolved[key] = default

    color = get_color_configuration(resolved["color"])
    build_kwargs = dict(
        name=resolved["name"],
        enable=_parse_state(resolved["enable"]),
        min_logger_level=parse_level(resolved["min_logger_level"]),
        queue=queue,
        color_configuration=color,
    )
    if resolved.get("bundle_identifier") is not None:
        build_kwargs["bundle_identifier"] = resolved["bundle_identifier"]
    logger = LoggerServiceFactory.build(**build_kwargs)

    for entry in resolved["services"]:
        cfg = service_config_from(entry)
        logger.add(ConsoleLoggerService(
            cfg.name,
            enable=cfg.enabled,
            min_logger_level=cfg.level,
            bundle_identifier=logger.bundle_identifier,
            log_contexts=[LoggerContext(c) for c in sorted(cfg.contexts)],
            color_configuration=color,
            file=file,
        ))
    return logger


# ---------------------------------------------------------------------------
# Config writing
# ---------------------------------------------------------------------------
def save_project_config(data, project_dir=None):
    """Write .debuggable.json to the project directory."""
    target = Path(project_dir or os.getcwd()) / ".debuggable.json"
    with open(target, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return target


def save_global_config(data):
    """Write the global config file."""
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = get_global_config_path()
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return config_path
