import pytest


@pytest.fixture
def target():
    from ..utils import JSONPointer

    return JSONPointer


def test_root(target):
    assert str(target()) == "/"
    assert target() == target("/") == target("")
    assert target().parent is None


def test_components(target):
    p = target() / "data" / "relationships"
    p = p[0]
    assert p.components == ("data", "relationships", "0")
    assert str(p) == "/data/relationships/0"
    assert p == target("/data/relationships/0")
    assert p.parent == target("/data/relationships")
    assert hash(p) == hash(target("/data/relationships/0"))


def test_escaping(target):
    p = target() / "a/b" / "c~d"
    assert str(p) == "/a~1b/c~0d"
    assert target("/a~1b/c~0d") == p


def test_invalid(target):
    with pytest.raises(ValueError):
        target("data")
