# colima

Building blocks for running container runtimes inside Lima virtual machines:
PATH and mount-path helpers, CPU architecture names, a container runtime
registry, Lima mount and port-forward settings, SSH config rewriting, guest
file access, a cached downloader, `/etc/hosts` entries and Docker daemon
settings.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install ".[test]"
pytest
```

## Modules

- `colima.paths`: `append_to_path` and `remove_from_path` for colon separated
  PATH values, `clean_path` (expands environment variables and `~`, rejects
  relative paths with `ValueError`, returns the path with a trailing slash),
  `shell_split`, `random_available_port`, `home_dir` and `is_macos`.
- `colima.sha`: `sha256` and `sha1` of a string, returning a `Digest` whose
  `hex()` gives the lower case hexadecimal form.
- `colima.environment`: the `Arch` enum (`X8664`, `AARCH64`, with `go_arch()`),
  `normalize_arch` for aliases such as `amd64`, `arm64` or `m1`, `host_arch`;
  the `HostActions`, `GuestActions` and `Container` protocols; and a registry of
  container runtimes: `register_container`, `new_container` (raises
  `UnsupportedRuntimeError` for an unknown name) and `container_runtimes`
  (sorted names of the runtimes that are not hidden).
- `colima.qemu`: `InstallDir` (`bin()`, `share()`, `root()`,
  `bins_env_var()`) and `host_dir`, which finds the QEMU system binary for the
  host architecture in `PATH`.
- `colima.terminal`: `VerboseWriter`, which shows only the last few lines of
  command output on a terminal (and passes output straight through otherwise),
  `sanitize_line` and `clear_line`.
- `colima.fsutil`: a swappable filesystem, `DefaultFS` and `FakeFS`, used
  through `mkdir_all` and `open_file`.
- `colima.osutil`: `executable` resolves the path of the running program,
  preferring the `COLIMA_BINARY` environment variable.
- `colima.yamlutil`: `write_yaml` writes a value (dataclasses and enums
  included) as YAML; `encode_yaml` returns a commented default YAML document
  with settings filled in, keeping its comments and key order, and `save`
  writes that result to a file.
- `colima.downloader`: `Downloader` and `download`, which fetch a URL into a
  host-side cache keyed by the URL's SHA-256 and copy it into the guest.
- `colima.guestfs`: `read`, `write` and `stat` of files inside the guest, and
  `parse_stat` returning a `FileInfo`.
- `colima.sshconfig`: `InstanceInfo` and `parse_instances` for line-per-instance
  JSON listings (only names starting with `colima` are kept),
  `replace_ssh_cmd`, `replace_ssh_config` and `runtime_label`.
- `colima.hosts`: `includes_host` and `add_host` for the guest's `/etc/hosts`.
- `colima.docker`: `daemon_config` and `daemon_json`, which enable buildkit and
  the cgroupfs driver in `daemon.json` settings.
- `colima.limaconf`: `MountSpec`, `LimaMount`, `PortForward` and `Provision`;
  `check_overlapping_mounts`, `resolve_mount_type`, `resolve_mounts` and
  `default_port_forwards`.

## Example

```python
from colima.paths import append_to_path, remove_from_path
from colima.environment import normalize_arch
from colima.limaconf import MountSpec, resolve_mounts

path = append_to_path("/usr/bin", "/opt/qemu/bin")   # "/opt/qemu/bin:/usr/bin"
remove_from_path(path, "/opt/qemu/bin")              # "/usr/bin"
normalize_arch("m1")                                 # Arch.AARCH64

resolve_mounts([], "sshfs", "/cache", "colima")
# [LimaMount(location="~", writable=True), LimaMount(location="/tmp/colima", writable=True)]
```

## What this package does not do

There is no command line program, and nothing here creates, starts or stops a
virtual machine. The package never runs programs itself: functions that need
to run commands (`download`, `add_host`, the `guestfs` functions) issue them
through `HostActions` or `GuestActions` objects that the caller supplies. No
container runtimes are registered by default; `register_container` is where
callers add their own.