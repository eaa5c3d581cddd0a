import functools as _func
import logging
import re as _re
import typing as _ty

from . import extractor as _extractor, percent as _percent
from .encoding import EncodingMode
from .errors import MalformedQuery
from .utils import Pair, check_separator, is_stringable, stringify

logger = logging.getLogger(__name__)

_INVALID_CHARS = _re.compile(r"[\x00-\x1f\x7f]")


def split_pairs(query: str, separator: str = "&") -> list[tuple[str, str | None]]:
    """Split ``query`` on the exact ``separator`` string, then each segment on
    its first ``=``. A segment without ``=`` has a ``None`` value."""
    pairs = []
    for segment in query.split(separator):
        key, eq, value = segment.partition("=")
        pairs.append((key, value if eq else None))
    return pairs


class QueryParser(_ty.NamedTuple):
    """Turns a query string into an ordered list of ``(key, value)`` pairs.

    Unlike :func:`urllib.parse.parse_qsl` nothing is dropped or merged:
    duplicate keys, empty keys and keys without ``=`` all survive, and key
    names are never mangled.
    """

    separator: str = "&"
    mode: EncodingMode = EncodingMode.RFC3986
    encoding: str = "utf-8"
    errors: str = "surrogateescape"

    def parse(
        self,
        query: _ty.Any,
        separator: str | None = None,
        mode: EncodingMode | int | str | None = None,
    ) -> list[Pair]:
        mode = EncodingMode.coerce(self.mode if mode is None else mode)
        separator = check_separator(self.separator if separator is None else separator)
        if query is None:
            return []
        if not is_stringable(query):
            raise TypeError(
                "query should be a str, a scalar, a stringable object or None, "
                f"not {type(query).__name__!r}"
            )
        query = stringify(query, self.encoding, self.errors)
        if query == "":
            return [("", None)]
        if _INVALID_CHARS.search(query):
            logger.debug("control character found in query %r", query)
            raise MalformedQuery(f"Invalid query string: {query!r}")

        pairs = [
            self._decode_pair(key, value, mode)
            for key, value in split_pairs(query, separator)
        ]
        logger.debug("parsed %d pair(s) using %s", len(pairs), mode.name)
        return pairs

    def _decode_pair(self, key: str, value: str | None, mode: EncodingMode) -> Pair:
        if mode is EncodingMode.RFC1738:
            key = key.replace("+", " ")
        key = _percent.decode_normalize(key, self.encoding, self.errors)
        if value is None:
            return key, None
        if mode is EncodingMode.RFC1738:
            value = value.replace("+", " ")
        return key, _percent.decode_normalize(value, self.encoding, self.errors)

    def extract(
        self,
        query: _ty.Any,
        separator: str | None = None,
        mode: EncodingMode | int | str | None = None,
    ) -> dict[str, _ty.Any]:
        """Return the variables of the query the way PHP ``parse_str`` would,
        but without mangling key names.

        Dots and spaces in names are kept, an unmatched ``[`` makes the whole
        name a flat key and a malformed trailing bracket group is dropped.
        """
        return _extractor.extract_pairs(
            self.parse(query, separator, mode), self.encoding, self.errors
        )


@_func.cache
def default_parser() -> QueryParser:
    return QueryParser()
