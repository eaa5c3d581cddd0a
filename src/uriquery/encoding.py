import enum as _enum
import logging

from .errors import UnsupportedEncoding

logger = logging.getLogger(__name__)


class EncodingMode(_enum.IntEnum):
    """Query string encoding conventions.

    The integer codes are the historical ``PHP_QUERY_*`` values so that
    callers migrating plain integers keep working.
    """

    NONE = 0
    RFC1738 = 1
    RFC3986 = 2
    RFC3987 = 3

    @classmethod
    def coerce(cls, mode: "EncodingMode | int | str") -> "EncodingMode":
        if isinstance(mode, cls):
            return mode
        if isinstance(mode, str):
            try:
                return cls[mode.upper()]
            except KeyError:
                pass
        elif isinstance(mode, int) and not isinstance(mode, bool):
            try:
                return cls(mode)
            except ValueError:
                pass
        logger.debug("rejecting encoding mode %r", mode)
        raise UnsupportedEncoding(f"Unsupported or unknown encoding: {mode!r}")
