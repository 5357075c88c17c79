from dataclasses import dataclass

import pytest
from ruamel.yaml import YAML

from colima.yamlutil import encode_yaml, save, write_yaml

DEFAULTS = """\
# default configuration
cpu: 2
docker: {}
kubernetes:
  enabled: false
  version: v1
mounts: []
"""


def _load(text):
    return YAML(typ="safe").load(text)


def test_encode_docker_nested():
    values = {"docker": {"insecure-registries": ["127.0.0.1"]}}
    got = _load(encode_yaml(values, DEFAULTS))
    assert got["docker"] == {"insecure-registries": ["127.0.0.1"]}


def test_encode_keeps_comments():
    out = encode_yaml({"cpu": 4}, DEFAULTS)
    assert "# default configuration" in out
    assert _load(out)["cpu"] == 4


def test_encode_missing_scalar_becomes_null():
    got = _load(encode_yaml({}, DEFAULTS))
    assert got["cpu"] is None


def test_encode_missing_section_kept():
    got = _load(encode_yaml({}, DEFAULTS))
    assert got["kubernetes"] == {"enabled": False, "version": "v1"}


def test_encode_section_filled_by_key():
    got = _load(encode_yaml({"kubernetes": {"enabled": True}}, DEFAULTS))
    assert got["kubernetes"] == {"enabled": True, "version": None}


def test_encode_replaces_lists():
    got = _load(encode_yaml({"mounts": [{"location": "/data"}]}, DEFAULTS))
    assert got["mounts"] == [{"location": "/data"}]


def test_encode_keeps_key_order():
    got = _load(encode_yaml({"cpu": 1}, DEFAULTS))
    assert list(got) == ["cpu", "docker", "kubernetes", "mounts"]


def test_encode_empty_defaults_raises():
    with pytest.raises(ValueError):
        encode_yaml({}, "")


def test_encode_invalid_defaults_raises():
    with pytest.raises(ValueError, match="invalid yaml"):
        encode_yaml({}, "key: [unclosed")


def test_save_writes_file(tmp_path):
    target = tmp_path / "colima.yaml"
    save({"cpu": 6, "docker": {"debug": True}}, target, DEFAULTS)
    got = _load(target.read_text())
    assert got["cpu"] == 6
    assert got["docker"] == {"debug": True}


@dataclass
class _Sample:
    name: str
    sizes: tuple


def test_write_yaml_round_trip(tmp_path):
    target = tmp_path / "out.yaml"
    write_yaml(_Sample(name="vm", sizes=(1, 2)), target)
    assert _load(target.read_text()) == {"name": "vm", "sizes": [1, 2]}


def test_write_yaml_mapping(tmp_path):
    target = tmp_path / "map.yaml"
    value = {"env": {"A": "b"}, "dns": []}
    write_yaml(value, target)
    assert _load(target.read_text()) == value