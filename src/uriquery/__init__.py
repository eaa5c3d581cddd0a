import logging
import typing as _ty

from .builder import QueryBuilder, default_builder
from .encoding import EncodingMode
from .errors import InvalidQueryPair, MalformedQuery, QueryError, UnsupportedEncoding
from .parser import QueryParser, default_parser, split_pairs
from .query import Query

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EncodingMode",
    "InvalidQueryPair",
    "MalformedQuery",
    "Query",
    "QueryBuilder",
    "QueryError",
    "QueryParser",
    "UnsupportedEncoding",
    "build_query",
    "extract_query",
    "parse_query",
    "split_pairs",
]


def parse_query(
    query: _ty.Any,
    separator: str = "&",
    mode: EncodingMode | int | str = EncodingMode.RFC3986,
) -> list[tuple[str, str | None]]:
    """Parse a query string into an ordered list of key/value pairs."""
    return default_parser().parse(query, separator, mode)


def build_query(
    pairs: _ty.Iterable[_ty.Any],
    separator: str = "&",
    mode: EncodingMode | int | str = EncodingMode.RFC3986,
) -> str | None:
    """Build a query string from key/value pairs, ``None`` if there are none."""
    return default_builder().build(pairs, separator, mode)


def extract_query(
    query: _ty.Any,
    separator: str = "&",
    mode: EncodingMode | int | str = EncodingMode.RFC3986,
) -> dict[str, _ty.Any]:
    """Parse a query string into nested dicts like PHP ``parse_str``
    without mangling key names."""
    return default_parser().extract(query, separator, mode)
