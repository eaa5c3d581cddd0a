import functools as _func
import itertools as _itertools
import logging
import typing as _ty

from . import percent as _percent
from .encoding import EncodingMode
from .errors import InvalidQueryPair
from .utils import check_separator, is_stringable, stringify

logger = logging.getLogger(__name__)

PairLike: _ty.TypeAlias = "_ty.Sequence[_ty.Any] | _ty.Mapping[_ty.Any, _ty.Any]"


class QueryBuilder(_ty.NamedTuple):
    """Builds a query string from an ordered collection of pairs.

    Keys are never modified beyond percent-encoding, duplicates are kept and a
    ``None`` value produces a key without ``=``. An empty collection builds to
    ``None`` so that "no query" stays distinct from the empty query.
    """

    separator: str = "&"
    mode: EncodingMode = EncodingMode.RFC3986
    encoding: str = "utf-8"
    errors: str = "surrogateescape"

    def build(
        self,
        pairs: _ty.Iterable[PairLike],
        separator: str | None = None,
        mode: EncodingMode | int | str | None = None,
    ) -> str | None:
        if isinstance(pairs, (str, bytes, _ty.Mapping)) or not isinstance(
            pairs, _ty.Iterable
        ):
            raise TypeError(
                "pairs should be an iterable of key/value pairs, "
                f"not {type(pairs).__name__!r}"
            )
        separator = check_separator(self.separator if separator is None else separator)
        encode = _percent.encoder(
            self.mode if mode is None else mode, separator, self.encoding, self.errors
        )

        segments = []
        for entry in pairs:
            pair = self._filter_pair(entry)
            if pair is not None:
                segments.append(self._build_pair(encode, *pair))

        logger.debug("built %d pair(s)", len(segments))
        if not segments:
            return None
        return separator.join(segments)

    def _filter_pair(self, entry) -> tuple[str, _ty.Any] | None:
        if isinstance(entry, _ty.Mapping):
            entry = entry.values()
        elif isinstance(entry, (str, bytes)) or not isinstance(entry, _ty.Iterable):
            raise TypeError(
                f"A pair should be a sequence or a mapping, {type(entry).__name__!r} given"
            )
        items = list(_itertools.islice(entry, 2))
        if not items:
            return None

        key, value = (items + [None])[:2]
        if key is None or not is_stringable(key):
            raise InvalidQueryPair(
                "A pair key must be a stringable object or a scalar value, "
                f"{type(key).__name__!r} given"
            )
        if value is not None and not is_stringable(value):
            raise InvalidQueryPair(
                "A pair value must be a stringable object, a scalar or None, "
                f"{type(value).__name__!r} given"
            )
        return stringify(key, self.encoding, self.errors), value

    def _build_pair(self, encode: _ty.Callable[[str], str], key: str, value) -> str:
        key = encode(key)
        if value is None:
            return key
        if isinstance(value, bool):
            return f"{key}={'1' if value else '0'}"
        return f"{key}={encode(stringify(value, self.encoding, self.errors))}"


@_func.cache
def default_builder() -> QueryBuilder:
    return QueryBuilder()
