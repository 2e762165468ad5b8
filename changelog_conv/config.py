"""
config.py

Responsibility: load the converter's settings (package name, maintainer, output path).

Sources, highest precedence first:
- command-line flags (applied by `cli.py` via `ConverterConfig.override`)
- an optional YAML config file
- the DEBFULLNAME / DEBEMAIL environment variables
- built-in defaults
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from changelog_conv.errors import ConfigError
from changelog_conv.model import Maintainer

DEFAULT_PACKAGE = "package"
DEFAULT_OUTPUT = "debian.changelog"
DEFAULT_MAINTAINER = Maintainer(name="Maintainer", email="maintainer@example.com")


@dataclass(frozen=True)
class ConverterConfig:
    package: str = DEFAULT_PACKAGE
    maintainer: Maintainer = field(default_factory=lambda: DEFAULT_MAINTAINER)
    output: str = DEFAULT_OUTPUT

    def override(
        self,
        *,
        package: str | None = None,
        name: str | None = None,
        email: str | None = None,
        output: str | None = None,
    ) -> ConverterConfig:
        """Return a copy with every non-None argument taking precedence."""
        maintainer = Maintainer(
            name=name if name is not None else self.maintainer.name,
            email=email if email is not None else self.maintainer.email,
        )
        return replace(
            self,
            package=package if package is not None else self.package,
            maintainer=maintainer,
            output=output if output is not None else self.output,
        )


def _str_value(data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        raise ConfigError(f"`{key}` must be a string.")
    return str(value).strip()


def config_from_mapping(data: Mapping[str, Any], env: Mapping[str, str] | None = None) -> ConverterConfig:
    """
    Build a ConverterConfig from parsed YAML.

    Maintainer fields may be given either under a `maintainer` mapping or as
    top-level `name` / `email` keys.
    """
    env = os.environ if env is None else env

    maint_raw = data.get("maintainer") or {}
    if not isinstance(maint_raw, dict):
        raise ConfigError("`maintainer` must be an object/mapping when provided.")

    name = env.get("DEBFULLNAME") or DEFAULT_MAINTAINER.name
    email = env.get("DEBEMAIL") or DEFAULT_MAINTAINER.email
    name = _str_value(data, "name", name)
    email = _str_value(data, "email", email)
    name = _str_value(maint_raw, "name", name)
    email = _str_value(maint_raw, "email", email)

    return ConverterConfig(
        package=_str_value(data, "package", DEFAULT_PACKAGE),
        maintainer=Maintainer(name=name, email=email),
        output=_str_value(data, "output", DEFAULT_OUTPUT),
    )


def load_config(path: str | Path | None = None, env: Mapping[str, str] | None = None) -> ConverterConfig:
    """
    Load configuration from a YAML file. Without a path, only the
    environment and the defaults apply.
    """
    if path is None:
        return config_from_mapping({}, env)

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file does not exist: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {p}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")
    return config_from_mapping(data, env)
