"""Text helpers used when formatting instance information."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

import yaml

FUNC_HELP = [
    "indent <size>: add spaces to beginning of each line",
    "missing <message>: return message if the text is empty",
]


def prefix_string(prefix: str, text: str) -> str:
    """Add ``prefix`` to the beginning of every non-empty line."""
    return "\n".join(prefix + line if line else "" for line in text.split("\n"))


def indent_string(size: int, text: str) -> str:
    """Indent every non-empty line by ``size`` spaces."""
    return prefix_string(" " * size, text)


def trim_string(cutset: str, text: str) -> str:
    """Remove the characters in ``cutset`` from both ends of ``text``."""
    return text.strip(cutset)


def missing_string(message: str, text: str) -> str:
    """Return ``message`` when ``text`` is empty, otherwise ``text``."""
    return message if text == "" else text


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def to_json(value: Any) -> str:
    """Encode ``value`` as compact JSON without a trailing newline."""
    try:
        return json.dumps(
            _plain(value), separators=(",", ":"), ensure_ascii=False, default=str
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"failed to marshal as JSON: {value!r}: {exc}") from exc


class _BlockDumper(yaml.SafeDumper):
    """Dumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.Node:
    style = "|" if "\n" in data else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style=style)


_BlockDumper.add_representer(str, _represent_str)


def to_yaml(value: Any) -> str:
    """Encode ``value`` as a YAML document that starts with ``---``."""
    try:
        body = yaml.dump(
            _plain(value),
            Dumper=_BlockDumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to marshal as YAML: {value!r}: {exc}") from exc
    return "---\n" + body.removesuffix("\n")


def _check_arity(args: tuple[Any, ...]) -> None:
    if not args:
        raise ValueError("function takes at least one string argument")
    if len(args) > 2:
        raise ValueError("function takes at most 2 arguments")


def indent(*args: Any) -> str:
    """Template helper: ``indent([size,] text)`` with a default size of 2."""
    _check_arity(args)
    size = 2
    if len(args) > 1:
        size = args[0]
        if not isinstance(size, int) or isinstance(size, bool):
            raise TypeError("optional first argument must be an integer")
    text = args[-1]
    if not isinstance(text, str):
        raise TypeError("last argument must be a string")
    return indent_string(size, text)


def missing(*args: Any) -> str:
    """Template helper: ``missing([message,] text)`` with a default message."""
    _check_arity(args)
    message = "<missing>"
    if len(args) > 1:
        message = args[0]
        if not isinstance(message, str):
            raise TypeError("optional first argument must be a string")
    text = args[-1]
    if not isinstance(text, str):
        raise TypeError("last argument must be a string")
    return missing_string(message, text)