"""Network information reported by the macOS ``system_profiler`` tool."""

from __future__ import annotations

import functools
import json
import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import Any

log = logging.getLogger(__name__)

_DEFAULT_SYSTEM_PROFILER = "/usr/sbin/system_profiler"


@dataclass(frozen=True)
class Proxies:
    """Proxy settings of one network service."""

    exception_list: list[str] = field(default_factory=list)
    ftp_enable: str = ""
    ftp_port: Any = None
    ftp_proxy: str = ""
    ftp_user: str = ""
    http_enable: str = ""
    http_port: Any = None
    http_proxy: str = ""
    http_user: str = ""
    https_enable: str = ""
    https_port: Any = None
    https_proxy: str = ""
    https_user: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Proxies:
        return cls(
            exception_list=list(data.get("ExceptionList") or []),
            ftp_enable=str(data.get("FTPEnable") or ""),
            ftp_port=data.get("FTPPort"),
            ftp_proxy=str(data.get("FTPProxy") or ""),
            ftp_user=str(data.get("FTPUser") or ""),
            http_enable=str(data.get("HTTPEnable") or ""),
            http_port=data.get("HTTPPort"),
            http_proxy=str(data.get("HTTPProxy") or ""),
            http_user=str(data.get("HTTPUser") or ""),
            https_enable=str(data.get("HTTPSEnable") or ""),
            https_port=data.get("HTTPSPort"),
            https_proxy=str(data.get("HTTPSProxy") or ""),
            https_user=str(data.get("HTTPSUser") or ""),
        )


@dataclass(frozen=True)
class NetworkInfo:
    """One entry of the ``SPNetworkDataType`` report, in service order."""

    interface: str = ""
    dns_server_addresses: list[str] = field(default_factory=list)
    ipv4_addresses: list[str] = field(default_factory=list)
    proxies: Proxies = field(default_factory=Proxies)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetworkInfo:
        if not isinstance(data, dict):
            raise ValueError(f"network entry must be an object, got {data!r}")
        dns = data.get("DNS") or {}
        ipv4 = data.get("IPv4") or {}
        proxies = data.get("Proxies") or {}
        if not all(isinstance(x, dict) for x in (dns, ipv4, proxies)):
            raise ValueError(f"malformed network entry {data!r}")
        return cls(
            interface=str(data.get("interface") or ""),
            dns_server_addresses=list(dns.get("ServerAddresses") or []),
            ipv4_addresses=list(ipv4.get("Addresses") or []),
            proxies=Proxies.from_dict(proxies),
        )


def parse_network_data(data: str | bytes) -> list[NetworkInfo]:
    """Parse the JSON output of ``system_profiler SPNetworkDataType -json``."""
    doc = json.loads(data)
    if not isinstance(doc, dict):
        raise ValueError("system_profiler output must be a JSON object")
    entries = doc.get("SPNetworkDataType") or []
    if not isinstance(entries, list):
        raise ValueError("SPNetworkDataType must be a list")
    return [NetworkInfo.from_dict(entry) for entry in entries]


def system_profiler(data_type: str) -> bytes:
    """Run ``system_profiler DATA_TYPE -json`` and return its standard output."""
    exe = shutil.which("system_profiler") or _DEFAULT_SYSTEM_PROFILER
    args = [exe, data_type, "-json"]
    try:
        result = subprocess.run(args, capture_output=True)
    except OSError as exc:
        raise RuntimeError(f"failed to run {args}: {exc}") from exc
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace")
        if stderr.startswith("Usage: system_profiler"):
            log.warning(
                "Can't fetch system_profiler data; maybe OS is older than macOS Catalina 10.15"
            )
            return b"{}"
        stdout = result.stdout.decode("utf-8", errors="replace")
        raise RuntimeError(
            f"failed to run {args}: stdout={stdout!r}, stderr={stderr!r}: "
            f"exit status {result.returncode}"
        )
    return result.stdout


@functools.lru_cache(maxsize=None)
def _cached_network_data() -> tuple[NetworkInfo, ...]:
    return tuple(parse_network_data(system_profiler("SPNetworkDataType")))


def network_data() -> list[NetworkInfo]:
    """Return the host's network services, queried once and then cached."""
    return list(_cached_network_data())


network_data.cache_clear = _cached_network_data.cache_clear  # type: ignore[attr-defined]