"""Location of the per-user state directory."""

from __future__ import annotations

import os
from pathlib import Path

DOT_LIMA = ".lima"


def lima_dir() -> str:
    """Return ``$LIMA_HOME`` or ``~/.lima``, with symlinks resolved if it exists.

    ``~/.lima`` is preferred over platform data directories to keep socket
    paths short enough.
    """
    directory = os.environ.get("LIMA_HOME", "")
    if not directory:
        directory = os.path.join(str(Path.home()), DOT_LIMA)
    if not os.path.lexists(directory):
        return directory
    try:
        return os.path.realpath(directory, strict=True)
    except OSError as exc:
        raise OSError(f"cannot evaluate symlinks in {directory!r}: {exc}") from exc