"""
Placeholder substitution for loaded configuration.

``${VAR}`` reads the process environment, ``${VAR:-fallback}`` supplies a
value when VAR is unset or empty, and ``{env}`` becomes the active
environment name (dev, staging, prod).
"""

import os
import re
from typing import Any

_ENV_VAR = re.compile(r"\$\{(?P<name>[^}:]+)(?::-(?P<fallback>[^}]*))?\}")


def _substitute(match: re.Match) -> str:
    value = os.environ.get(match.group("name"))
    fallback = match.group("fallback")
    if value is not None and (value or fallback is None):
        return value
    if fallback is not None:
        return fallback
    # Unset without a fallback: keep the placeholder so the failure names the variable
    return match.group(0)


def resolve_config(config_data: dict[str, Any], env: str = "dev") -> dict[str, Any]:
    """
    Return a copy of ``config_data`` with every string placeholder resolved.

    Args:
        config_data: Parsed YAML
        env: Active environment name

    Returns:
        Resolved configuration
    """
    return _resolve(config_data, env)


def _resolve(value: Any, env: str) -> Any:
    if isinstance(value, str):
        return _ENV_VAR.sub(_substitute, value).replace("{env}", env)
    if isinstance(value, dict):
        return {key: _resolve(item, env) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve(item, env) for item in value]
    return value
