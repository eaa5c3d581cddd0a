import pytest
from uriquery import EncodingMode, percent


@pytest.mark.parametrize(
    "text,expected",
    [
        ("abc", "abc"),
        ("%2d%2e%30%39%41%4f%5a%5f%61%79%7e", "%2D%2E%30%39%41%4F%5A%5F%61%79%7E"),
        ("%7a%7A", "zz"),
        ("%20%5b%40%60%7b", " [@`{"),
        ("%2B%26%3D%25", "+&=%"),
        ("%", "%"),
        ("%4", "%4"),
        ("%g1", "%g1"),
        ("%e2%82%ac", "€"),
        ("é%20", "é "),
    ],
)
def test_decode_normalize(text, expected):
    assert percent.decode_normalize(text) == expected


def test_decode():
    assert percent.decode("%41%7a%20%zz%") == "Az %zz%"


def test_allowed_chars():
    allowed = percent.allowed_chars("&")
    assert "&" not in allowed
    assert ";" in allowed and "%" in allowed and "~" in allowed
    assert "&" not in percent.allowed_chars("&amp;")
    assert "&" in percent.allowed_chars(";")
    assert "#" not in allowed and " " not in allowed


@pytest.mark.parametrize(
    "mode,expected",
    [
        (EncodingMode.RFC3986, "a%20b+c~%23%5B%5D&%41%2520"),
        (EncodingMode.RFC1738, "a%20b%2Bc%7E%23%5B%5D&%41%2520"),
        (EncodingMode.RFC3987, "a b+c~%23[]&%41%20"),
        (EncodingMode.NONE, "a b+c~#[]&%41%20"),
    ],
)
def test_encode(mode, expected):
    assert percent.encode("a b+c~#[]&%41%20", mode, ";") == expected


def test_encoder_validates_mode():
    encode = percent.encoder("rfc3987", "&")
    assert encode("a&b") == "a%26b"
    with pytest.raises(ValueError):
        percent.encoder(7)
