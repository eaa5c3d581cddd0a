import typing as _ty

from .builder import default_builder
from .encoding import EncodingMode
from .parser import default_parser


def _flatten(
    mapping: _ty.Mapping[str, _ty.Any],
) -> _ty.Iterator[tuple[str, _ty.Any]]:
    for key, value in mapping.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                yield key, item
        else:
            yield key, value


class Query(str):
    SEPARATOR = "&"
    MODE = EncodingMode.RFC3986

    def __new__(
        cls,
        query: (
            str
            | _ty.Iterable[tuple[str, str | None]]
            | _ty.Mapping[str, str | None | _ty.Sequence[str | None]]
        ) = "",
    ):
        if isinstance(query, str):
            pass
        else:
            if isinstance(query, _ty.Mapping):
                query = _flatten(query)
            query = default_builder().build(query, cls.SEPARATOR, cls.MODE) or ""

        return str.__new__(cls, query)

    def decode(query) -> list[tuple[str, str | None]]:
        return default_parser().parse(str(query), query.SEPARATOR, query.MODE)

    def to_dict(query):
        query_: dict[str, list[str | None]] = {}
        for k, v in query.decode():
            query_.setdefault(k, []).append(v)
        return query_

    def extract(query):
        return default_parser().extract(str(query), query.SEPARATOR, query.MODE)
