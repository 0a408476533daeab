import subprocess
from unittest import mock

import pytest

from limatools import sysprof
from limatools.sysprof import NetworkInfo, Proxies, parse_network_data, system_profiler

SAMPLE = b"""{
  "SPNetworkDataType": [
    {
      "interface": "en0",
      "DNS": {"ServerAddresses": ["192.0.2.53"]},
      "IPv4": {"Addresses": ["192.0.2.10"]},
      "Proxies": {
        "ExceptionList": ["*.local", "169.254/16"],
        "HTTPEnable": "yes",
        "HTTPPort": 8080,
        "HTTPProxy": "proxy.example.com"
      }
    },
    {
      "interface": "en1",
      "Proxies": {}
    }
  ]
}"""


def _completed(returncode=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess([], returncode, stdout=stdout, stderr=stderr)


def test_parse_network_data_fields():
    networks = parse_network_data(SAMPLE)
    assert [n.interface for n in networks] == ["en0", "en1"]
    first = networks[0]
    assert first.dns_server_addresses == ["192.0.2.53"]
    assert first.ipv4_addresses == ["192.0.2.10"]
    assert first.proxies.exception_list == ["*.local", "169.254/16"]
    assert first.proxies.http_enable == "yes"
    assert first.proxies.http_port == 8080
    assert first.proxies.http_proxy == "proxy.example.com"


def test_parse_network_data_defaults_for_missing_fields():
    second = parse_network_data(SAMPLE)[1]
    assert second.ipv4_addresses == []
    assert second.dns_server_addresses == []
    assert second.proxies == Proxies()


def test_parse_empty_object():
    assert parse_network_data("{}") == []


def test_parse_invalid_json():
    with pytest.raises(ValueError):
        parse_network_data("not json")


def test_parse_non_object():
    with pytest.raises(ValueError):
        parse_network_data("[]")


def test_network_info_from_dict_rejects_non_object():
    with pytest.raises(ValueError):
        NetworkInfo.from_dict("en0")


def test_system_profiler_success_uses_fallback_path():
    with mock.patch("limatools.sysprof.shutil.which", return_value=None), mock.patch(
        "limatools.sysprof.subprocess.run", return_value=_completed(stdout=SAMPLE)
    ) as run:
        out = system_profiler("SPNetworkDataType")
    assert out == SAMPLE
    assert run.call_args.args[0] == [
        "/usr/sbin/system_profiler",
        "SPNetworkDataType",
        "-json",
    ]


def test_system_profiler_old_os_returns_empty_object():
    result = _completed(returncode=1, stderr=b"Usage: system_profiler [-listDataTypes]")
    with mock.patch("limatools.sysprof.subprocess.run", return_value=result):
        assert system_profiler("SPNetworkDataType") == b"{}"


def test_system_profiler_failure_raises():
    result = _completed(returncode=2, stderr=b"boom")
    with mock.patch("limatools.sysprof.subprocess.run", return_value=result):
        with pytest.raises(RuntimeError, match="boom"):
            system_profiler("SPNetworkDataType")


def test_network_data_is_cached():
    sysprof.network_data.cache_clear()
    try:
        with mock.patch(
            "limatools.sysprof.subprocess.run", return_value=_completed(stdout=SAMPLE)
        ) as run:
            first = sysprof.network_data()
            second = sysprof.network_data()
        assert first == second
        assert len(first) == 2
        assert run.call_count == 1
    finally:
        sysprof.network_data.cache_clear()