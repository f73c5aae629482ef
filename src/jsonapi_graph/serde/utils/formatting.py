import typing


def english_enumerate(items: typing.Iterable[str], conj: str = "and") -> str:
    """
    Joins words into an English enumeration, such as ``a, b, and c``.
    """
    words = list(items)
    if len(words) < 2:
        return "".join(words)
    if len(words) == 2:
        return f"{words[0]} {conj} {words[1]}"
    return f"{', '.join(words[:-1])}, {conj} {words[-1]}"


def quote(name: str) -> str:
    return f'"{name}"'
