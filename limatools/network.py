"""Host DNS servers and proxy settings to hand to guests."""

from __future__ import annotations

import sys
from typing import Any, Iterable

from limatools.sysprof import NetworkInfo, Proxies, network_data


def _join_host_port(host: str, port: str) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def _port_text(port: Any) -> str:
    if isinstance(port, (int, float)) and not isinstance(port, bool):
        return f"{port:.0f}" if port != 0 else ""
    if isinstance(port, str):
        return port
    return ""


def proxy_url(proxy: str, port: Any) -> str:
    """Build a proxy URL from a host (or URL) and a numeric or string port."""
    port_text = _port_text(port)
    if "://" in proxy:
        return f"{proxy}:{port_text}" if port_text else proxy
    if port_text:
        proxy = _join_host_port(proxy, port_text)
    return "http://" + proxy


def _first_with_ipv4(networks: Iterable[NetworkInfo]) -> NetworkInfo | None:
    # The networks are already in service order.
    return next((nw for nw in networks if nw.ipv4_addresses), None)


def dns_addresses_from(networks: Iterable[NetworkInfo]) -> list[str]:
    """DNS servers of the first network service that has an IPv4 address."""
    nw = _first_with_ipv4(networks)
    return list(nw.dns_server_addresses) if nw else []


def proxy_settings_from(networks: Iterable[NetworkInfo]) -> dict[str, str]:
    """Proxy environment variables of the first service with an IPv4 address.

    Proxies that need a user name are skipped, as their password lives in the
    keychain. ``no_proxy`` is never set.
    """
    nw = _first_with_ipv4(networks)
    proxies = nw.proxies if nw else Proxies()
    env: dict[str, str] = {}
    if proxies.ftp_enable == "yes" and proxies.ftp_user == "":
        env["ftp_proxy"] = proxy_url(proxies.ftp_proxy, proxies.ftp_port)
    if proxies.http_enable == "yes" and proxies.http_user == "":
        env["http_proxy"] = proxy_url(proxies.http_proxy, proxies.http_port)
    if proxies.https_enable == "yes" and proxies.https_user == "":
        env["https_proxy"] = proxy_url(proxies.https_proxy, proxies.https_port)
    return env


def dns_addresses() -> list[str]:
    """DNS servers of the host; only known on macOS."""
    if sys.platform != "darwin":
        return []
    return dns_addresses_from(network_data())


def proxy_settings() -> dict[str, str]:
    """Proxy environment of the host; only known on macOS."""
    if sys.platform != "darwin":
        return {}
    return proxy_settings_from(network_data())