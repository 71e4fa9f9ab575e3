from typing import Any

from pgxid.exception import (
    ComponentTooLong,
    InvalidFormatId,
    NonPrintableComponent,
)

MAX_FORMAT_ID = 0x7FFFFFFF
MAX_COMPONENT_LENGTH = 64
PRINTABLE_LOW = 0x20
PRINTABLE_HIGH = 0x7F


def validate(format_id: Any, gtrid: Any, bqual: Any) -> None:
    """Check an XA triple against the component rules.

    Args:
        format_id (int): Format identifier, between 0 and 0x7fffffff
        gtrid (str): Global transaction id
        bqual (str): Branch qualifier

    Raises:
        InvalidFormatId: If format_id is not an integer in range
        ComponentTooLong: If gtrid or bqual is longer than 64 bytes
        NonPrintableComponent: If gtrid or bqual has a byte outside of
            the printable ASCII range
        TypeError: If gtrid or bqual is not a string
    """
    validate_format_id(format_id)
    validate_component("gtrid", gtrid)
    validate_component("bqual", bqual)


def validate_format_id(format_id: Any) -> None:
    if isinstance(format_id, bool) or not isinstance(format_id, int):
        raise InvalidFormatId(
            f"format_id must be an integer, got {type(format_id).__name__}"
        )
    if format_id < 0 or format_id > MAX_FORMAT_ID:
        raise InvalidFormatId(
            "format_id must be a non-negative 32-bit integer"
        )


def validate_component(name: str, value: Any) -> None:
    if not isinstance(value, str):
        raise TypeError(
            f"{name} must be a string, got {type(value).__name__}"
        )

    # Limits are in bytes, not characters
    raw = value.encode("utf-8", "surrogatepass")
    if len(raw) > MAX_COMPONENT_LENGTH:
        raise ComponentTooLong(
            f"{name} must be a string no longer than "
            f"{MAX_COMPONENT_LENGTH} bytes",
            name,
        )
    for byte in raw:
        if byte < PRINTABLE_LOW or byte >= PRINTABLE_HIGH:
            raise NonPrintableComponent(
                f"{name} must contain only printable characters", name
            )
