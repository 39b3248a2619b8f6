"""
Configuration loader for the entity memory.
Reads settings from YAML file with environment variable substitution.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml


DUPLICATE_POLICIES = ("last_wins", "error")
MISSING_REFERENCE_POLICIES = ("keep", "blank", "error")


@dataclass
class MemoryConfig:
    substitute_prefix: str = "$"         # marks an entity reference in action templates
    negative_prefix: str = "~"           # marks the negative twin of an entity
    on_duplicate: str = "last_wins"      # "last_wins" | "error"
    missing_reference: str = "keep"      # "keep" | "blank" | "error"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    json: bool = False


@dataclass
class Settings:
    app_name: str = "EntityMemory"
    memory: MemoryConfig = field(default_factory=MemoryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_settings: Optional[Settings] = None


def _substitute_env_vars(value: str) -> str:
    """Replace ${VAR_NAME} patterns with environment variable values."""
    pattern = re.compile(r'\$\{(\w+)\}')
    def replacer(match):
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))
    return pattern.sub(replacer, value)


def _process_values(obj: Any) -> Any:
    """Recursively substitute env vars in all string values."""
    if isinstance(obj, str):
        return _substitute_env_vars(obj)
    elif isinstance(obj, dict):
        return {k: _process_values(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_process_values(v) for v in obj]
    return obj


def _check_choice(name: str, value: str, choices: tuple[str, ...]) -> str:
    if value not in choices:
        raise ValueError(f"Invalid {name} '{value}', expected one of {', '.join(choices)}")
    return value


def load_settings(config_path: str = None) -> Settings:
    """Load settings from YAML file."""
    global _settings

    if config_path is None:
        config_path = os.environ.get(
            "ENTITY_MEMORY_CONFIG",
            str(Path(__file__).parent / "settings.yaml"),
        )

    settings = Settings()

    if Path(config_path).exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        raw = _process_values(raw)

        settings.app_name = raw.get("app_name", settings.app_name)

        if "memory" in raw:
            mem = raw["memory"] or {}
            settings.memory = MemoryConfig(
                substitute_prefix=mem.get("substitute_prefix", "$"),
                negative_prefix=mem.get("negative_prefix", "~"),
                on_duplicate=_check_choice(
                    "on_duplicate", mem.get("on_duplicate", "last_wins"), DUPLICATE_POLICIES,
                ),
                missing_reference=_check_choice(
                    "missing_reference", mem.get("missing_reference", "keep"), MISSING_REFERENCE_POLICIES,
                ),
            )

        if "logging" in raw:
            log = raw["logging"] or {}
            settings.logging = LoggingConfig(
                level=str(log.get("level", "INFO")).upper(),
                json=bool(log.get("json", False)),
            )

    _settings = settings
    return settings


def get_settings() -> Settings:
    """Return cached settings or load from default path."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() reloads."""
    global _settings
    _settings = None
