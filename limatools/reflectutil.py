"""Introspection helpers for dataclass instances."""

from __future__ import annotations

import dataclasses
from typing import Any


def _is_empty(value: Any) -> bool:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(_is_empty(getattr(value, f.name)) for f in dataclasses.fields(value))
    if value is None:
        return True
    try:
        return not value
    except (TypeError, ValueError):
        return False


def unknown_non_empty_fields(obj: Any, *args: str) -> list[str]:
    """Return names of fields of ``obj`` that are set but not among ``args``."""
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"expected a dataclass instance, got {type(obj).__name__}")
    known = set(args)
    return [
        field.name
        for field in dataclasses.fields(obj)
        if not _is_empty(getattr(obj, field.name)) and field.name not in known
    ]