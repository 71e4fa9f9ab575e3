import logging
from base64 import b64encode

import pytest

from pgxid import Xid, ensure_xid, from_wire_string, to_wire_string
from pgxid.codec import parse_triple


def _b64(value: bytes) -> str:
    return b64encode(value).decode("ascii")


def test_encodes_xa_triple():
    assert to_wire_string(Xid(1, "abc", "xyz")) == "1_YWJj_eHl6"
    assert str(Xid(1, "abc", "xyz")) == "1_YWJj_eHl6"


def test_encodes_with_padding():
    xid = Xid(42, "transfer-0001", "accounts")
    assert to_wire_string(xid) == "42_dHJhbnNmZXItMDAwMQ==_YWNjb3VudHM="


def test_encodes_unparsed_as_raw_string():
    xid = Xid.unparsed("some_random_prepared_name")
    assert to_wire_string(xid) == "some_random_prepared_name"


def test_decodes_xa_triple():
    xid = from_wire_string("1_YWJj_eHl6")
    assert xid == Xid(1, "abc", "xyz")
    assert xid.format_id == 1
    assert xid.gtrid == "abc"
    assert xid.bqual == "xyz"


@pytest.mark.parametrize(
    "triple",
    (
        (0, "", ""),
        (1, "abc", "xyz"),
        (0x7FFFFFFF, "g" * 64, "b" * 64),
        (7, "with_underscores_", "_and spaces ~!"),
        (123, "a=b/c+d", "?"),
    ),
)
def test_round_trip(triple):
    xid = Xid(*triple)
    assert tuple(from_wire_string(to_wire_string(xid))) == triple


@pytest.mark.parametrize(
    "name",
    (
        "some_random_prepared_name",
        "foreign",
        "",
        "99_xxx_yyy",
        "1_%%%_eHl6",
        "1_YWJj",
        "1_YWJj_eHl6_",
        "-1_YWJj_eHl6",
        "1_YWJj_eHl6\n",
        "１_YWJj_eHl6",
        "2147483648_YWJj_eHl6",
        "1_YWJj_eHl",
        "1_é_eHl6",
    ),
)
def test_falls_back_to_unparsed(name):
    xid = from_wire_string(name)
    assert xid.is_unparsed
    assert xid.format_id is None
    assert xid.gtrid == name
    assert xid.bqual is None
    assert to_wire_string(xid) == name


def test_largest_format_id_is_parsed():
    xid = from_wire_string("2147483647_YWJj_eHl6")
    assert xid.format_id == 0x7FFFFFFF


def test_decoded_gtrid_too_long_falls_back():
    name = f"1_{_b64(b'a' * 65)}_eHl6"
    assert from_wire_string(name).is_unparsed


def test_decoded_non_printable_falls_back():
    name = f"1_{_b64(bytes([0x1F]))}_{_b64(bytes([0x7F]))}"
    assert from_wire_string(name).is_unparsed


def test_decoded_non_ascii_falls_back():
    name = f"1_{_b64('é'.encode('utf-8'))}_eHl6"
    assert from_wire_string(name).is_unparsed


def test_parse_triple():
    assert parse_triple("1_YWJj_eHl6") == (1, "abc", "xyz")
    assert parse_triple("not a triple") is None
    assert parse_triple("1_%%%_eHl6") is None


def test_abandoned_parse_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="pgxid.codec"):
        from_wire_string("1_%%%_eHl6")
    assert "1_%%%_eHl6" in caplog.text


def test_foreign_name_is_not_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="pgxid.codec"):
        from_wire_string("some_random_prepared_name")
    assert caplog.text == ""


def test_ensure_xid():
    xid = Xid(1, "abc", "xyz")
    assert ensure_xid(xid) is xid
    assert ensure_xid("1_YWJj_eHl6") == xid
    assert ensure_xid("foreign") == Xid.unparsed("foreign")


@pytest.mark.parametrize("obj", (42, None, b"1_YWJj_eHl6", (1, "a", "b")))
def test_ensure_xid_rejects_other_types(obj):
    with pytest.raises(TypeError, match="not a valid transaction id"):
        ensure_xid(obj)
