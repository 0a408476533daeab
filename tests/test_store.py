import os

import pytest

from limatools import store


@pytest.fixture
def lima_home(tmp_path, monkeypatch):
    monkeypatch.setenv("LIMA_HOME", str(tmp_path))
    return tmp_path


@pytest.mark.parametrize("name", ["default", "foo-bar", "a.b_c", "x1"])
def test_validate_identifier_accepts(name):
    store.validate_identifier(name)
    assert store.instance_dir(name).endswith(os.sep + name)


@pytest.mark.parametrize("name", ["-foo", "foo-", "foo..bar", "foo/bar", "a b", "ä"])
def test_validate_identifier_rejects_pattern(name):
    with pytest.raises(ValueError, match="must match"):
        store.validate_identifier(name)


def test_validate_identifier_rejects_empty():
    with pytest.raises(ValueError, match="must not be empty"):
        store.validate_identifier("")


def test_validate_identifier_length_limit():
    store.validate_identifier("a" * store.MAX_IDENTIFIER_LENGTH)
    with pytest.raises(ValueError, match="maximum length"):
        store.validate_identifier("a" * (store.MAX_IDENTIFIER_LENGTH + 1))


def test_instance_dir_joins_lima_home(lima_home):
    expected = os.path.join(os.path.realpath(lima_home), "foo")
    assert store.instance_dir("foo") == expected


def test_instance_dir_rejects_bad_name(lima_home):
    with pytest.raises(ValueError):
        store.instance_dir("../etc")


def test_instances_lists_only_visible_directories(lima_home):
    for name in ("zeta", "alpha", "_config", ".hidden"):
        (lima_home / name).mkdir()
    (lima_home / "file.txt").write_text("x")
    assert store.instances() == ["alpha", "zeta"]


def test_instances_missing_directory(tmp_path, monkeypatch):
    monkeypatch.setenv("LIMA_HOME", str(tmp_path / "does-not-exist"))
    assert store.instances() == []