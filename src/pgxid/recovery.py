from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List, Sequence

from pgxid.codec import from_wire_string
from pgxid.exception import MalformedRow, QueryFailed
from pgxid.xid import Xid

logger = logging.getLogger(__name__)

RECOVER_QUERY = (
    "SELECT gid, prepared, owner, database FROM pg_prepared_xacts;"
)
RECOVER_COLUMNS = ("gid", "prepared", "owner", "database")


def recover(connection) -> List[Xid]:
    """Return the list of transactions prepared on the database

    Args:
        connection: A DB-API connection, such as ``psycopg.Connection``

    Raises:
        QueryFailed: If the recovery query cannot be run or fetched
        MalformedRow: If a returned row is missing a column

    Returns:
        List[Xid]: One xid per prepared transaction, in query order
    """
    try:
        cursor = connection.cursor()
    except Exception as e:
        raise QueryFailed(f"Could not open a recovery cursor: {e}") from e

    try:
        cursor.execute(RECOVER_QUERY)
        rows = cursor.fetchall()
    except Exception as e:
        logger.error("Recovery query failed: %s", e)
        try:
            cursor.close()
        except Exception as close_error:
            logger.error(
                "Could not close the recovery cursor: %s", close_error
            )
        raise QueryFailed(f"Recovery query failed: {e}") from e

    try:
        cursor.close()
    except Exception as e:
        raise QueryFailed(
            f"Could not close the recovery cursor: {e}"
        ) from e

    return _build_xids(rows)


async def recover_async(connection) -> List[Xid]:
    """Return the list of transactions prepared on the database

    Same as `recover`, for an async connection such as
    ``psycopg.AsyncConnection``.
    """
    try:
        cursor = connection.cursor()
    except Exception as e:
        raise QueryFailed(f"Could not open a recovery cursor: {e}") from e

    try:
        await cursor.execute(RECOVER_QUERY)
        rows = await cursor.fetchall()
    except Exception as e:
        logger.error("Recovery query failed: %s", e)
        try:
            await cursor.close()
        except Exception as close_error:
            logger.error(
                "Could not close the recovery cursor: %s", close_error
            )
        raise QueryFailed(f"Recovery query failed: {e}") from e

    try:
        await cursor.close()
    except Exception as e:
        raise QueryFailed(
            f"Could not close the recovery cursor: {e}"
        ) from e

    return _build_xids(rows)


def _build_xids(rows: Sequence[Any]) -> List[Xid]:
    xids = [_xid_from_row(index, row) for index, row in enumerate(rows)]
    logger.debug("Recovered %d prepared transactions", len(xids))
    return xids


def _xid_from_row(index: int, row: Any) -> Xid:
    try:
        if isinstance(row, Mapping):
            gid, prepared, owner, database = (
                row[column] for column in RECOVER_COLUMNS
            )
        else:
            gid, prepared, owner, database = (
                row[position] for position in range(len(RECOVER_COLUMNS))
            )
    except (IndexError, KeyError, TypeError) as e:
        raise MalformedRow(
            f"Recovery row {index} is missing a column: {e}", index
        ) from e

    if not isinstance(gid, str):
        raise MalformedRow(
            f"Recovery row {index} has a non string gid: {gid!r}", index
        )

    xid = from_wire_string(gid)
    xid._attach_recovery_info(prepared, owner, database)
    return xid
