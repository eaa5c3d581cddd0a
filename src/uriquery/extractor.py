import re as _re
import typing as _ty

from . import percent as _percent

Node: _ty.TypeAlias = "str | dict[str, Node]"

_INDEX = _re.compile(r"0|[1-9][0-9]*")


class _Indices:
    """Next free integer index per dict, keyed by ``id()``.

    Dicts created by :func:`fold` are registered on creation; any other dict
    is scanned once on first use.
    """

    __slots__ = ("_next",)

    def __init__(self):
        self._next: dict[int, int] = {}

    def register(self, node: dict[str, Node]) -> None:
        self._next[id(node)] = 0

    def _get(self, node: dict[str, Node]) -> int:
        try:
            return self._next[id(node)]
        except KeyError:
            indices = [int(key) for key in node if _INDEX.fullmatch(key)]
            self._next[id(node)] = nxt = max(indices) + 1 if indices else 0
            return nxt

    def seen(self, node: dict[str, Node], key: str) -> None:
        if _INDEX.fullmatch(key):
            nxt = self._get(node)
            if int(key) >= nxt:
                self._next[id(node)] = int(key) + 1

    def take(self, node: dict[str, Node]) -> str:
        nxt = self._get(node)
        self._next[id(node)] = nxt + 1
        return str(nxt)


def fold(
    name: str,
    value: str,
    target: dict[str, Node],
    indices: _Indices | None = None,
) -> None:
    """Store ``value`` under the bracket-grammar ``name`` inside ``target``.

    ``a[b][c]`` walks (and creates) nested dicts, ``a[]`` appends under the
    next free integer index. A scalar met on the way is replaced by a dict.
    Pass the same ``indices`` across calls on one ``target`` so appends stay
    constant time.
    """
    if not name:
        return
    if indices is None:
        indices = _Indices()
    while True:
        left = name.find("[")
        right = name.find("]", left) if left >= 0 else -1
        if right < 0:
            target[name] = value
            indices.seen(target, name)
            return

        prefix = name[:left]
        node = target.get(prefix)
        if not isinstance(node, dict):
            node = target[prefix] = {}
            indices.register(node)
            indices.seen(target, prefix)

        index = name[left + 1 : right]
        if not index:
            node[indices.take(node)] = value
            return

        remainder = name[right + 1 :]
        if not remainder.startswith("[") or "]" not in remainder[1:]:
            remainder = ""
        name, target = index + remainder, node


def extract_pairs(
    pairs: _ty.Iterable[tuple[str, str | None]],
    encoding: str = "utf-8",
    errors: str = "surrogateescape",
) -> dict[str, Node]:
    variables: dict[str, Node] = {}
    indices = _Indices()
    indices.register(variables)
    for key, value in pairs:
        fold(key, _percent.decode(value or "", encoding, errors), variables, indices)
    return variables
