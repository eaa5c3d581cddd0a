"""Percent-encoding primitives for query keys and values.

Decoding keeps a fixed set of triplets encoded (with uppercase hex digits)
instead of turning them back into literal characters. Encoding depends on the
:class:`~uriquery.encoding.EncodingMode`:

* ``RFC3986`` escapes everything outside the unreserved characters and the
  query sub-delimiters, minus the separator.
* ``RFC1738`` does the same and then escapes ``+`` and ``~``.
* ``RFC3987`` only escapes control characters, ``#`` and the separator.
* ``NONE`` leaves the text untouched.
"""

import functools as _func
import html as _html
import typing as _ty

import uritools as _uritools

from .encoding import EncodingMode

_HEXDIG = frozenset(b"0123456789ABCDEFabcdef")
_UNRESERVED = frozenset(_uritools.UNRESERVED)
_SUBDELIMS = "!$'()*+,;=:@?/&%"

# Octets whose triplets stay encoded on decode. Note there is no "z".
_PROTECTED = frozenset(
    b"-.0123456789"
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ_"
    b"abcdefghijklmnopqrstuvwxy~"
)

_IRI_ESCAPES = {c: f"%{c:02X}" for c in (*range(0x20), 0x7F, ord("#"))}


def _is_hex(digits: bytes | str) -> bool:
    if isinstance(digits, str):
        digits = digits.encode("ascii", "replace")
    return len(digits) == 2 and all(c in _HEXDIG for c in digits)


def decode_normalize(
    text: str, encoding: str = "utf-8", errors: str = "surrogateescape"
) -> str:
    """Decode percent-triplets except the protected ones, which are only
    uppercased. Anything that is not a triplet is left alone."""
    if "%" not in text:
        return text
    parts = text.encode(encoding, errors).split(b"%")
    result = bytearray(parts[0])
    for part in parts[1:]:
        digits = part[:2]
        if not _is_hex(digits):
            result += b"%" + part
            continue
        octet = int(digits, 16)
        if octet in _PROTECTED:
            result += b"%" + digits.upper()
        else:
            result.append(octet)
        result += part[2:]
    return result.decode(encoding, errors)


def decode(text: str, encoding: str = "utf-8", errors: str = "surrogateescape") -> str:
    """Decode every percent-triplet; malformed ones are kept as is."""
    return _uritools.uridecode(text, encoding, errors)


def _quote(text: str, encoding: str, errors: str) -> str:
    return _uritools.uriencode(text, "", encoding, errors).decode("ascii")


@_func.cache
def allowed_chars(separator: str) -> frozenset[str]:
    """Characters left literal by RFC 3986 encoding with ``separator``."""
    subdelims = _SUBDELIMS.replace(_html.unescape(separator), "")
    return _UNRESERVED | frozenset(subdelims)


def _encode_rfc3986(text: str, separator: str, encoding: str, errors: str) -> str:
    allowed = allowed_chars(separator)
    chunks: list[str] = []
    pos, end = 0, len(text)
    while pos < end:
        char = text[pos]
        if char == "%" and _is_hex(text[pos + 1 : pos + 3]):
            triplet = text[pos : pos + 3]
            if chr(int(triplet[1:], 16)) in _UNRESERVED:
                chunks.append(triplet)
            else:
                chunks.append(_quote(triplet, encoding, errors))
            pos += 3
        elif char in allowed:
            chunks.append(char)
            pos += 1
        else:
            start = pos
            while pos < end and text[pos] not in allowed:
                pos += 1
            chunks.append(_quote(text[start:pos], encoding, errors))
    return "".join(chunks)


def _encode_rfc3987(text: str, separator: str, encoding: str, errors: str) -> str:
    return text.translate(_IRI_ESCAPES).replace(
        separator, _quote(separator, encoding, errors)
    )


def encode(
    text: str,
    mode: EncodingMode = EncodingMode.RFC3986,
    separator: str = "&",
    encoding: str = "utf-8",
    errors: str = "surrogateescape",
) -> str:
    mode = EncodingMode.coerce(mode)
    if mode is EncodingMode.NONE:
        return text
    if mode is EncodingMode.RFC3987:
        return _encode_rfc3987(text, separator, encoding, errors)
    encoded = _encode_rfc3986(text, separator, encoding, errors)
    if mode is EncodingMode.RFC1738:
        encoded = encoded.replace("+", "%2B").replace("~", "%7E")
    return encoded


def encoder(
    mode: EncodingMode,
    separator: str = "&",
    encoding: str = "utf-8",
    errors: str = "surrogateescape",
) -> _ty.Callable[[str], str]:
    """Bind :func:`encode` to a validated mode and separator."""
    mode = EncodingMode.coerce(mode)
    return _func.partial(
        encode, mode=mode, separator=separator, encoding=encoding, errors=errors
    )
