import pytest


@pytest.mark.parametrize(
    ("items", "expected"),
    [
        ([], ""),
        (["a"], "a"),
        (["a", "b"], "a and b"),
        (["a", "b", "c"], "a, b, and c"),
    ],
)
def test_english_enumerate(items, expected):
    from ..utils import english_enumerate

    assert english_enumerate(items) == expected
    assert english_enumerate(iter(items)) == expected


def test_english_enumerate_conj():
    from ..utils import english_enumerate

    assert english_enumerate(["a", "b"], conj="or") == "a or b"
