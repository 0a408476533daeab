"""Names and directories of the instances kept under the state directory."""

from __future__ import annotations

import os
import re

from limatools.dirnames import lima_dir

MAX_IDENTIFIER_LENGTH = 76

_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9]+(?:[._-](?:[A-Za-z0-9]+))*")


def validate_identifier(name: str) -> None:
    """Raise ValueError unless ``name`` is usable as an instance or disk name."""
    if not name:
        raise ValueError("identifier must not be empty")
    if len(name) > MAX_IDENTIFIER_LENGTH:
        raise ValueError(
            f"identifier {name!r} greater than maximum length "
            f"({MAX_IDENTIFIER_LENGTH} characters)"
        )
    if _IDENTIFIER_RE.fullmatch(name) is None:
        raise ValueError(f"identifier {name!r} must match {_IDENTIFIER_RE.pattern}")


def instances() -> list[str]:
    """Return the sorted names of the instances under the state directory.

    Hidden entries and entries starting with ``_`` are skipped, as are
    plain files. A missing state directory yields an empty list.
    """
    try:
        with os.scandir(lima_dir()) as entries:
            found = [
                entry.name
                for entry in entries
                if not entry.name.startswith((".", "_"))
                and entry.is_dir(follow_symlinks=False)
            ]
    except FileNotFoundError:
        return []
    return sorted(found)


def instance_dir(name: str) -> str:
    """Return the directory of instance ``name``; it need not exist."""
    validate_identifier(name)
    return os.path.join(lima_dir(), name)