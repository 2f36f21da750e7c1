"""Command-line value parsing helpers."""

from __future__ import annotations

import importlib
import json
from collections.abc import Mapping
from typing import Any


def parse_cli_value(raw: str) -> Any:
    """Parse CLI input value as JSON if possible; fallback to string."""
    text = raw.strip()
    if text == "":
        return ""
    try:
        return json.loads(text)
    except ValueError:
        lowered = text.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        return text


def load_object(spec: str) -> Any:
    """Import ``package.module:attribute``."""
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Expected 'module:attribute', got {spec!r}")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ValueError(f"{module_name} has no attribute {attr!r}") from e


def load_method_map(spec: str) -> Mapping[str, Any]:
    """Import a method map (name -> handler) given as ``module:attribute``."""
    obj = load_object(spec)
    if not isinstance(obj, Mapping):
        raise ValueError(f"{spec} is not a mapping of method names to handlers")
    return obj
