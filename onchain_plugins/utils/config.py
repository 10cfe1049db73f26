"""
Configuration lookup helpers.

Plugins take their configuration as a plain string mapping. When none is
injected they read the process environment.
"""
import os
from typing import Iterable, List, Mapping, Optional


def resolve_config(config: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    """Return the injected config or the process environment."""
    if config is None:
        return os.environ
    return config


def missing_keys(config: Mapping[str, str], keys: Iterable[str]) -> List[str]:
    """Keys that are absent or blank in the config."""
    return [key for key in keys if not (config.get(key) or "").strip()]
