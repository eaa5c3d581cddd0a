import typing as _ty

Pair: _ty.TypeAlias = tuple[str, str | None]

_SCALARS = (str, bytes, int, float)


def is_stringable(value) -> bool:
    """True for scalars and objects whose type defines its own ``__str__``."""
    if isinstance(value, _SCALARS):
        return True
    return type(value).__str__ is not object.__str__


def stringify(value, encoding: str = "utf-8", errors: str = "strict") -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode(encoding, errors)
    return str(value)


def check_separator(separator: str) -> str:
    if not isinstance(separator, str):
        raise TypeError(
            f"separator should be a str, not {type(separator).__name__!r}"
        )
    if not separator:
        raise ValueError("separator can not be empty")
    return separator
