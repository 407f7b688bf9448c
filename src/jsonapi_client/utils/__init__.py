import typing


def english_enumerate(items: typing.Iterable[str], conj: str = ", and ") -> str:
    buf = []

    i = iter(items)
    try:
        x = next(i)
    except StopIteration:
        return ""
    buf.append(x)

    lx: typing.Optional[str] = None

    for x in i:
        if lx is not None:
            buf.append(", ")
            buf.append(lx)
        lx = x
    if lx is not None:
        buf.append(conj)
        buf.append(lx)
    return "".join(buf)


def pointer_join(pointer: str, *components: typing.Union[str, int]) -> str:
    """
    Appends components to a JSON pointer (RFC 6901), escaping ``~`` and ``/``.

    >>> pointer_join("/", "data", 0)
    '/data/0'
    """
    buf = [] if pointer in ("", "/") else [pointer]
    for c in components:
        buf.append("/")
        buf.append(str(c).replace("~", "~0").replace("/", "~1"))
    return "".join(buf) or "/"
