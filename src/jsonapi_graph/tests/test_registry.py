import pytest

from ..exceptions import (
    ConfigurationError,
    DuplicateResourceTypeError,
    UnknownResourceTypeError,
)
from ..models import ResourceDescriptor
from .testing import people_descr, posts_descr


@pytest.fixture
def target():
    from ..registry import ResourceTypeRegistry

    return ResourceTypeRegistry


def test_register_and_lookup(target):
    registry = target()
    people = people_descr()
    registry.register(people)
    assert registry.lookup("people") is people
    assert "people" in registry
    assert len(registry) == 1
    assert list(registry) == [people]


def test_duplicate_registration_fails(target):
    registry = target()
    registry.register(people_descr())
    with pytest.raises(DuplicateResourceTypeError) as excinfo:
        registry.register(ResourceDescriptor(name="people"))
    assert excinfo.value.name == "people"
    assert isinstance(excinfo.value, ConfigurationError)


def test_register_unregister_register(target):
    registry = target()
    people = people_descr()
    registry.register(people)
    registry.unregister(people)
    assert "people" not in registry
    registry.register(people)
    assert registry.lookup("people") is people


def test_unregister_by_name(target):
    registry = target([people_descr(), posts_descr()])
    registry.unregister("posts")
    assert [descr.name for descr in registry] == ["people"]


def test_unregister_absent_fails(target):
    registry = target()
    with pytest.raises(UnknownResourceTypeError):
        registry.unregister("people")


def test_lookup_absent_fails(target):
    registry = target([people_descr()])
    with pytest.raises(UnknownResourceTypeError) as excinfo:
        registry.lookup("aliens")
    assert excinfo.value.name == "aliens"
    assert isinstance(excinfo.value, LookupError)
    assert str(excinfo.value) == 'no resource known as "aliens" (known: people)'
