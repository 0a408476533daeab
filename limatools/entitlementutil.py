"""Checking and adding the hypervisor entitlement on QEMU binaries (macOS)."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
import tempfile

from limatools.uiutil import confirm

log = logging.getLogger(__name__)

HYPERVISOR_ENTITLEMENT = "com.apple.security.hypervisor"

_ENTITLEMENTS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
  <dict>
    <key>com.apple.security.hypervisor</key>
    <true/>
  </dict>
</plist>"""


def _run(args: list[str]) -> str:
    try:
        result = subprocess.run(args, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    except OSError as exc:
        raise RuntimeError(f"failed to run {args}: {exc}") from exc
    out = (result.stdout or b"").decode("utf-8", errors="replace")
    log.debug("Executed %s: out=%r (exit status %d)", args, out, result.returncode)
    if result.returncode != 0:
        raise RuntimeError(
            f"failed to run {args}: exit status {result.returncode} (out={out!r})"
        )
    return out


def is_signed(qemu_exe: str) -> None:
    """Raise RuntimeError unless the binary is validly signed with the entitlement."""
    _run(["codesign", "--verify", qemu_exe])
    out = _run(["codesign", "--display", "--entitlements", "-", "--xml", qemu_exe])
    if HYPERVISOR_ENTITLEMENT not in out:
        raise RuntimeError(
            f'binary {qemu_exe!r} seems signed but lacking the "{HYPERVISOR_ENTITLEMENT}" entitlement'
        )


def sign(qemu_exe: str) -> None:
    """Ad-hoc sign the binary with the hypervisor entitlement."""
    fd, ent_name = tempfile.mkstemp(prefix="lima-qemu-entitlements-", suffix=".xml")
    try:
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as ent:
                ent.write(_ENTITLEMENTS_XML)
        except OSError as exc:
            raise RuntimeError(
                f"Failed to write to a temporary file {ent_name!r} for signing QEMU binary: {exc}"
            ) from exc
        _run(["codesign", "--sign", "-", "--entitlements", ent_name, "--force", qemu_exe])
    finally:
        try:
            os.remove(ent_name)
        except OSError:
            pass


def is_colima_wrapper(qemu_exe: str) -> bool:
    """Whether the path looks like a colima wrapper; use only for hint messages."""
    return "/.colima/_wrapper/" in qemu_exe


def ask_to_sign_if_not_signed_properly(qemu_exe: str) -> None:
    """Offer to sign the binary when it lacks the hypervisor entitlement."""
    try:
        is_signed(qemu_exe)
    except RuntimeError as exc:
        log.warning(
            'QEMU binary %r does not seem properly signed with the "%s" entitlement: %s',
            qemu_exe,
            HYPERVISOR_ENTITLEMENT,
            exc,
        )
        if is_colima_wrapper(qemu_exe):
            log.info(
                "Hint: the warning above is usually negligible for colima "
                "( Printed due to https://github.com/abiosoft/colima/issues/796 )"
            )
        answer = False
        if sys.stdout.isatty():
            message = f'Try to sign {qemu_exe!r} with the "{HYPERVISOR_ENTITLEMENT}" entitlement?'
            try:
                answer = confirm(message, True)
            except (EOFError, KeyboardInterrupt) as ask_exc:
                log.warning("No answer was given: %r", ask_exc)
        if answer:
            try:
                sign(qemu_exe)
            except RuntimeError as sign_exc:
                log.warning("Failed to sign %r: %s", qemu_exe, sign_exc)
            else:
                log.info(
                    'Successfully signed %r with the "%s" entitlement',
                    qemu_exe,
                    HYPERVISOR_ENTITLEMENT,
                )
        else:
            log.warning(
                'If QEMU does not start up, you may have to sign the QEMU binary with the "%s" '
                "entitlement manually. See https://github.com/lima-vm/lima/issues/1742 .",
                HYPERVISOR_ENTITLEMENT,
            )
    else:
        log.info(
            'QEMU binary %r seems properly signed with the "%s" entitlement',
            qemu_exe,
            HYPERVISOR_ENTITLEMENT,
        )