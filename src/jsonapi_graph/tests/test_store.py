import pytest

from ..exceptions import InvalidResourceStateError
from ..resource import Resource
from .testing import people_descr, posts_descr


@pytest.fixture
def target():
    from ..store import Store

    return Store


def test_add_and_get(target):
    store = target()
    post = Resource(posts_descr(), id="1")
    assert store.add(post) is post
    assert store.get("posts", "1") is post
    assert store.get("posts", "2") is None
    assert ("posts", "1") in store
    assert post in store
    assert len(store) == 1


def test_add_is_idempotent(target):
    post = Resource(posts_descr(), id="1")
    new_post = Resource(posts_descr())
    store = target([post, new_post])
    store.add(post)
    store.add(new_post)
    assert len(store) == 2


def test_at_most_one_instance_per_identity(target):
    store = target([Resource(posts_descr(), id="1")])
    with pytest.raises(InvalidResourceStateError):
        store.add(Resource(posts_descr(), id="1"))
    assert len(store) == 1


def test_insertion_order(target):
    posts = posts_descr()
    people = people_descr()
    a = Resource(posts)
    b = Resource(people, id="9")
    c = Resource(posts, id="2")
    store = target([a, b, c])
    assert store.first() is a
    assert list(store) == [a, b, c]
    assert store.resources_of_type("posts") == (a, c)
    assert target().first() is None


def test_assign_id(target):
    posts = posts_descr()
    post = Resource(posts)
    store = target([post])
    store.assign_id(post, "5")
    assert post.id == "5"
    assert store.get("posts", "5") is post

    store.assign_id(post, "6")
    assert store.get("posts", "5") is None
    assert store.get("posts", "6") is post

    other = store.add(Resource(posts, id="7"))
    with pytest.raises(InvalidResourceStateError):
        store.assign_id(other, "6")
    with pytest.raises(InvalidResourceStateError):
        store.assign_id(Resource(posts), "8")


def test_remove(target):
    post = Resource(posts_descr(), id="1")
    store = target([post])
    store.remove(post)
    assert len(store) == 0
    assert store.get("posts", "1") is None
    with pytest.raises(InvalidResourceStateError):
        store.remove(post)
