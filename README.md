# limatools

Host-side helpers for working with Linux virtual machine instances that live under
`~/.lima`, or under `$LIMA_HOME` when that variable is set.

## Installation

```sh
pip install .
```

To run the tests:

```sh
pip install .[test]
pytest
```

## Modules

- `limatools.dirnames`: `lima_dir()` returns `$LIMA_HOME`, or `~/.lima` when it is
  unset, with symlinks resolved when the directory exists.
- `limatools.store`: `validate_identifier(name)` raises `ValueError` for names that
  cannot be used for an instance; `instances()` lists the sorted instance directory
  names (skipping hidden entries, entries starting with `_`, and plain files);
  `instance_dir(name)` returns an instance's directory without checking it exists.
- `limatools.sshutil`: `format_ssh(instance_name, fmt, opts)` renders ssh options as
  a full `ssh` command line, bare `-o` arguments, one option per line, or an
  `~/.ssh/config` block (`SSHFormat.CMD`, `ARGS`, `OPTIONS`, `CONFIG`).
  `ssh_args_from_opts` builds `-F /dev/null -o ...` arguments, `quote_option`
  single-quotes options that contain double quotes, `read_public_key` returns a
  `PubKey`, `parse_openssh_version` / `detect_openssh_version` give a
  `semver.Version` (0.0.0 when unknown), `detect_valid_public_key` checks that the
  algorithm name matches the one inside the key, and `detect_aes_acceleration`
  reports whether the CPU appears to have AES instructions.
- `limatools.sysprof`: parses `system_profiler SPNetworkDataType -json` output into
  `NetworkInfo` and `Proxies` records (`parse_network_data`), runs the tool
  (`system_profiler`), and caches the host's result (`network_data`).
- `limatools.network`: `dns_addresses()` and `proxy_settings()` return the DNS
  servers and `ftp_proxy` / `http_proxy` / `https_proxy` values of the first network
  service with an IPv4 address. They only return data on macOS; elsewhere they
  return an empty list and an empty dict. `proxy_url`, `dns_addresses_from` and
  `proxy_settings_from` work on data you pass in.
- `limatools.entitlementutil`: on macOS, `is_signed` checks with `codesign` that a
  QEMU binary carries the `com.apple.security.hypervisor` entitlement, `sign`
  ad-hoc signs it with that entitlement, and `ask_to_sign_if_not_signed_properly`
  offers to do so on a terminal.
- `limatools.uiutil`: `confirm(message, default)` and `select(message, options)`
  prompt on standard input.
- `limatools.textutil`: `prefix_string`, `indent_string`, `trim_string`,
  `missing_string`, the template helpers `indent` and `missing`, and `to_json` /
  `to_yaml` (YAML output starts with `---` and writes multi-line strings as
  literal blocks).
- `limatools.reflectutil`: `unknown_non_empty_fields(obj, *known)` lists the
  non-empty fields of a dataclass instance that are not among the known names.

## Example

```python
import sys

from limatools.sshutil import SSHFormat, format_ssh, ssh_args_from_opts

opts = ["User=alice", "Hostname=127.0.0.1", "Port=60022"]
sys.stdout.write(format_ssh("default", SSHFormat.CONFIG, opts))
print(ssh_args_from_opts(opts))
```

The first call prints an `~/.ssh/config` entry for the host `lima-default`. The
second returns the arguments for `ssh`, starting with `-F /dev/null`.

## What it does not do

This is a library with no command-line program. It does not start, stop or inspect
virtual machines, read instance configuration files, print instance tables, inspect
disk images, look up host users or machine IDs, or read instance templates. It only
finds instance directories by name; what is inside them is left to the caller.