from dataclasses import dataclass, field

import pytest

from limatools.reflectutil import unknown_non_empty_fields


@dataclass
class Inner:
    value: int = 0


@dataclass
class Sample:
    name: str = ""
    count: int = 0
    tags: list = field(default_factory=list)
    options: dict = field(default_factory=dict)
    inner: Inner = field(default_factory=Inner)
    extra: object = None


def test_all_empty_yields_nothing():
    assert unknown_non_empty_fields(Sample()) == []


def test_set_fields_reported_in_order():
    obj = Sample(name="a", count=3, tags=["x"], inner=Inner(1))
    assert unknown_non_empty_fields(obj) == ["name", "count", "tags", "inner"]


def test_known_fields_are_excluded():
    obj = Sample(name="a", count=3, options={"k": "v"})
    assert unknown_non_empty_fields(obj, "name", "options") == ["count"]


def test_empty_containers_count_as_empty():
    obj = Sample(tags=[], options={}, inner=Inner(0))
    assert unknown_non_empty_fields(obj) == []


def test_non_dataclass_rejected():
    with pytest.raises(TypeError):
        unknown_non_empty_fields({"name": "a"})
    with pytest.raises(TypeError):
        unknown_non_empty_fields(Sample)