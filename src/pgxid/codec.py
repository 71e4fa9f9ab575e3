"""
Conversion between XA triples and PostgreSQL transaction names.

PostgreSQL identifies a prepared transaction by a single string, while XA
uses a (format_id, gtrid, bqual) triple. The triple is serialized with the
same algorithm used by pgjdbc, so that transactions prepared by either
driver can be recovered by the other.
"""

import logging
import re
from base64 import b64decode, b64encode
from typing import Any, Optional, Tuple

from pgxid.validator import validate
from pgxid.xid import Xid

logger = logging.getLogger(__name__)

XID_PATTERN = re.compile(r"(\d+)_([^_]*)_([^_]*)", re.ASCII)


def to_wire_string(xid: Xid) -> str:
    """Return the PostgreSQL transaction name for an xid

    Args:
        xid (Xid): The transaction identifier

    Returns:
        str: ``<format_id>_<base64 gtrid>_<base64 bqual>``, or the plain
            gtrid for an unparsed xid
    """
    if xid.format_id is None:
        return xid.gtrid
    return "%d_%s_%s" % (
        xid.format_id,
        _encode64(xid.gtrid),
        _encode64(xid.bqual or ""),
    )


def from_wire_string(s: str) -> Xid:
    """Build an xid from a PostgreSQL transaction name

    Never fails on a string: names that are not a valid XA triple are
    returned as an unparsed xid.

    Args:
        s (str): A transaction name, as found in ``pg_prepared_xacts.gid``

    Returns:
        Xid: The parsed triple, or an unparsed xid wrapping ``s``
    """
    triple = parse_triple(s)
    if triple is None:
        return Xid.unparsed(s)
    return Xid(*triple)


def parse_triple(s: str) -> Optional[Tuple[int, str, str]]:
    """Try to unpack an XA triple from a transaction name

    Returns:
        Optional[Tuple[int, str, str]]: The validated triple, or ``None``
            if ``s`` is not in the XA format
    """
    match = XID_PATTERN.fullmatch(s)
    if not match:
        return None

    try:
        format_id = int(match.group(1))
        gtrid = _decode64(match.group(2))
        bqual = _decode64(match.group(3))
        validate(format_id, gtrid, bqual)
    except ValueError as e:
        logger.debug(
            "Transaction name %r is not a valid XA triple: %s", s, e
        )
        return None
    return format_id, gtrid, bqual


def ensure_xid(obj: Any) -> Xid:
    """Coerce an object into an xid

    Accepts an xid built by the application, or a plain string such as a
    transaction name read from ``pg_prepared_xacts`` in order to recover a
    transaction not generated by this package.

    Raises:
        TypeError: If ``obj`` is neither an ``Xid`` nor a string
    """
    if isinstance(obj, Xid):
        return obj
    if isinstance(obj, str):
        return from_wire_string(obj)
    raise TypeError("not a valid transaction id")


def _encode64(value: str) -> str:
    return b64encode(value.encode("ascii")).decode("ascii")


def _decode64(value: str) -> str:
    return b64decode(value, validate=True).decode("ascii")
