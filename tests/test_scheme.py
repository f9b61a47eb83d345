from dataclasses import dataclass

import pytest

from imgeraser.scheme import V1, V1ALPHA1, GroupVersion, Scheme, SchemeError


@dataclass
class _Widget:
    name: str

    @classmethod
    def from_dict(cls, data):
        return cls(data["metadata"]["name"])


class _Other:
    @classmethod
    def from_dict(cls, data):
        return cls()


def test_parse_group_version():
    assert GroupVersion.parse("eraser.sh/v1") == V1
    assert GroupVersion.parse("eraser.sh/v1alpha1") == V1ALPHA1


def test_parse_core_version():
    assert GroupVersion.parse("v1") == GroupVersion("", "v1")
    assert GroupVersion("", "v1").api_version == "v1"


def test_api_version_round_trip():
    for gv in (V1, V1ALPHA1):
        assert GroupVersion.parse(gv.api_version) == gv
        assert str(gv) == gv.api_version


def test_parse_rejects_extra_slashes():
    with pytest.raises(SchemeError):
        GroupVersion.parse("a/b/c")


def test_register_and_lookup():
    scheme = Scheme()
    scheme.register(V1, "Widget", _Widget)
    assert scheme.lookup("eraser.sh/v1", "Widget") is _Widget
    assert scheme.lookup(V1, "Widget") is _Widget
    with pytest.raises(SchemeError):
        scheme.lookup(V1ALPHA1, "Widget")


def test_register_same_class_twice_is_allowed():
    scheme = Scheme()
    scheme.register(V1, "Widget", _Widget)
    scheme.register(V1, "Widget", _Widget)
    assert scheme.lookup(V1, "Widget") is _Widget


def test_conflicting_registration():
    scheme = Scheme()
    scheme.register(V1, "Widget", _Widget)
    with pytest.raises(SchemeError):
        scheme.register(V1, "Widget", _Other)


def test_decode_mapping_and_json():
    scheme = Scheme()
    scheme.register(V1, "Widget", _Widget)
    doc = {"apiVersion": "eraser.sh/v1", "kind": "Widget", "metadata": {"name": "w"}}
    assert scheme.decode(doc) == _Widget("w")
    text = '{"apiVersion": "eraser.sh/v1", "kind": "Widget", "metadata": {"name": "x"}}'
    assert scheme.decode(text) == _Widget("x")


@pytest.mark.parametrize(
    "doc",
    [
        {"apiVersion": "eraser.sh/v1"},
        {"kind": "Widget"},
        {"apiVersion": "eraser.sh/v2", "kind": "Widget"},
        "not json",
        "[1, 2]",
    ],
)
def test_decode_errors(doc):
    scheme = Scheme()
    scheme.register(V1, "Widget", _Widget)
    with pytest.raises(SchemeError):
        scheme.decode(doc)