import pytest
import uriquery
from uriquery import EncodingMode, MalformedQuery, UnsupportedEncoding
from uriquery.extractor import fold


@pytest.mark.parametrize(
    "query,expected",
    [
        ("&&", {}),
        (True, {"1": ""}),
        (False, {"0": ""}),
        (None, {}),
        ("arr[1=sid&arr[4][2=fred", {"arr[1": "sid", "arr": {"4": "fred"}}),
        ("arr1]=sid&arr[4]2]=fred", {"arr1]": "sid", "arr": {"4": "fred"}}),
        ("arr[one=sid&arr[4][two=fred", {"arr[one": "sid", "arr": {"4": "fred"}}),
        ("first=%41&second=%a&third=%b", {"first": "A", "second": "%a", "third": "%b"}),
        (
            "arr.test[1]=sid&arr test[4][two]=fred",
            {"arr.test": {"1": "sid"}, "arr test": {"4": {"two": "fred"}}},
        ),
        ("foo&bar=&baz=bar&fo.o", {"foo": "", "bar": "", "baz": "bar", "fo.o": ""}),
        ("foo[]=bar&foo[]=baz", {"foo": {"0": "bar", "1": "baz"}}),
        ("a=1&a=2", {"a": "2"}),
        ("a=1&a[]=2", {"a": {"0": "2"}}),
        ("a[b]=1&a=2", {"a": "2"}),
        ("a[5]=x&a[]=y", {"a": {"5": "x", "6": "y"}}),
        ("a[x]=1&a[]=2&a[]=3", {"a": {"x": "1", "0": "2", "1": "3"}}),
        ("a[b][c]=d&a[b][e]=f", {"a": {"b": {"c": "d", "e": "f"}}}),
        ("a[b]=1&a[b][c]=2", {"a": {"b": {"c": "2"}}}),
        ("a[b][]=1&a[b][]=2", {"a": {"b": {"0": "1", "1": "2"}}}),
        ("a[b[c]=1", {"a": {"b[c": "1"}}),
        ("[x]=1", {"": {"x": "1"}}),
        ("=1&a=%E2%82%AC", {"a": "€"}),
    ],
)
def test_extract(query, expected):
    assert uriquery.extract_query(query) == expected


def test_extract_keeps_insertion_order():
    result = uriquery.extract_query("b=1&a[z]=2&a[y]=3&c=4&b=5")
    assert list(result) == ["b", "a", "c"]
    assert list(result["a"]) == ["z", "y"]


def test_extract_rfc1738():
    result = uriquery.extract_query("a+b[c]=d+e", "&", EncodingMode.RFC1738)
    assert result == {"a b": {"c": "d e"}}


def test_extract_separator():
    assert uriquery.extract_query("a[]=1;a[]=2", ";") == {"a": {"0": "1", "1": "2"}}


def test_extract_errors():
    with pytest.raises(UnsupportedEncoding):
        uriquery.extract_query("a=b", "&", 42)
    with pytest.raises(MalformedQuery):
        uriquery.extract_query("a=b\0")
    with pytest.raises(TypeError):
        uriquery.extract_query(["a=b"])


def test_fold():
    target = {"a": "scalar"}
    fold("a[b][c]", "1", target)
    fold("", "ignored", target)
    fold("d", "2", target)
    assert target == {"a": {"b": {"c": "1"}}, "d": "2"}


def test_extract_many_appends():
    result = uriquery.extract_query("&".join(["a[]=1"] * 5000 + ["a[7000]=2", "a[]=3"]))
    assert len(result["a"]) == 5002
    assert result["a"]["4999"] == "1"
    assert result["a"]["7001"] == "3"


def test_fold_scans_foreign_dict_once():
    target = {"a": {"3": "x", "k": "y"}}
    fold("a[]", "z", target)
    assert target == {"a": {"3": "x", "k": "y", "4": "z"}}
