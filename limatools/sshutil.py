"""SSH option handling: output formats, public keys and OpenSSH detection."""

from __future__ import annotations

import base64
import binascii
import enum
import logging
import platform
import re
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

import semver

log = logging.getLogger(__name__)

_OPENSSH_VERSION_RE = re.compile(rb"^OpenSSH_(\d+\.\d+)(?:p(\d+))?\b")


class SSHFormat(str, enum.Enum):
    """Ways of printing the ssh options of an instance."""

    # ssh -o IdentityFile="..." -o User=example ... lima-default
    CMD = "cmd"
    # Like CMD, without "ssh" and the destination.
    ARGS = "args"
    # One KEY=VALUE option per line.
    OPTIONS = "options"
    # The ~/.ssh/config format.
    CONFIG = "config"


@dataclass(frozen=True)
class PubKey:
    filename: str
    content: str


def quote_option(option: str) -> str:
    """Single-quote an option that holds double quotes so a shell keeps them."""
    if '"' in option:
        return f"'{option}'"
    return option


def format_ssh(instance_name: str, fmt: SSHFormat | str, opts: list[str]) -> str:
    """Render ``opts`` for the instance in the given format, ending with a newline."""
    try:
        fmt = SSHFormat(fmt)
    except ValueError:
        raise ValueError(f"unknown format: {fmt!r}") from None
    fake_hostname = "lima-" + instance_name  # the default guest hostname
    option_args = [part for o in opts for part in ("-o", quote_option(o))]
    if fmt is SSHFormat.CMD:
        return " ".join(["ssh", *option_args, fake_hostname]) + "\n"
    if fmt is SSHFormat.ARGS:
        return " ".join(option_args) + "\n"
    if fmt is SSHFormat.OPTIONS:
        return "".join(o + "\n" for o in opts)
    lines = [f"Host {fake_hostname}\n"]
    for o in opts:
        key, sep, value = o.partition("=")
        if not sep:
            raise ValueError(f"unexpected option {o!r}")
        lines.append(f"  {key} {value}\n")
    return "".join(lines)


def read_public_key(path: str) -> PubKey:
    """Read an ssh public key file; the content is stripped of whitespace."""
    try:
        content = Path(path).read_text()
    except OSError as exc:
        raise type(exc)(
            exc.errno, f"failed to read ssh public key {path!r}: {exc.strerror}"
        ) from exc
    return PubKey(filename=path, content=content.strip())


def ssh_args_from_opts(opts: list[str]) -> list[str]:
    """Return ``-F /dev/null`` followed by ``-o OPTION`` for every option."""
    args = ["-F", "/dev/null"]
    for o in opts:
        args += ["-o", o]
    return args


def parse_openssh_version(version: str | bytes) -> semver.Version:
    """Parse ``ssh -V`` output such as ``OpenSSH_8.4p1``; 0.0.0 if unknown."""
    if isinstance(version, str):
        version = version.encode("utf-8", errors="replace")
    match = _OPENSSH_VERSION_RE.match(version)
    if match is None:
        return semver.Version(0, 0, 0)
    major_minor = match.group(1).decode()
    patch = (match.group(2) or b"0").decode()
    return semver.Version.parse(f"{major_minor}.{patch}")


def detect_openssh_version() -> semver.Version:
    """Return the version of the local ``ssh``, or 0.0.0 when it cannot be run."""
    args = ["ssh", "-V"]
    try:
        result = subprocess.run(args, capture_output=True)
    except OSError as exc:
        log.warning("failed to run %s: %s", args, exc)
        return semver.Version(0, 0, 0)
    stderr = result.stderr or b""
    if result.returncode != 0:
        log.warning(
            "failed to run %s: stderr=%r", args, stderr.decode("utf-8", errors="replace")
        )
        return semver.Version(0, 0, 0)
    version = parse_openssh_version(stderr)
    log.debug("OpenSSH version %s detected", version)
    return version


def detect_valid_public_key(content: str) -> bool:
    """Whether ``content`` looks like an OpenSSH public key line.

    The algorithm name must match the format identifier embedded in the key.
    """
    if "\n" in content:
        return False
    parts = content.split(" ", 2)
    if len(parts) < 2:
        return False
    algo, b64_key = parts[0], parts[1]
    try:
        decoded = base64.b64decode(b64_key, validate=True)
    except (binascii.Error, ValueError):
        return False
    if len(decoded) < 4:
        return False
    sig_length = int.from_bytes(decoded[:4], "big")
    if len(decoded) < sig_length:
        return False
    return algo.encode() == decoded[4 : 4 + sig_length]


def _darwin_x86_has_aes() -> bool | None:
    try:
        result = subprocess.run(
            ["sysctl", "-n", "machdep.cpu.features"], capture_output=True, text=True
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return "AES" in result.stdout.split()


def _linux_has_aes() -> bool | None:
    try:
        text = Path("/proc/cpuinfo").read_text()
    except OSError:
        return None
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip().lower() in ("flags", "features"):
            if "aes" in value.split():
                return True
    return False


def detect_aes_acceleration() -> bool:
    """Whether the CPU seems to have AES instructions."""
    machine = platform.machine().lower()
    if sys.platform == "darwin" and machine in ("arm64", "aarch64"):
        # AES-GCM is faster than chacha20-poly1305 on Apple silicon.
        log.debug(
            "Failed to detect CPU features. "
            "Assuming that AES acceleration is available on this Apple silicon."
        )
        return True
    if sys.platform.startswith("linux"):
        found = _linux_has_aes()
    elif sys.platform == "darwin":
        found = _darwin_x86_has_aes()
    else:
        found = None
    if found is None:
        log.warning(
            "Failed to detect CPU features. Assuming that AES acceleration is not available."
        )
        return False
    return found