from importlib.metadata import version

from .base.interface import BaseInterface
from .codec import ensure_xid, from_wire_string, to_wire_string
from .exception import (
    ComponentTooLong,
    ConfigurationError,
    InvalidFormatId,
    MalformedRow,
    NonPrintableComponent,
    PgXidError,
    QueryFailed,
    RecoveryError,
    ValidationError,
)
from .postgres.interface import PostgresPool
from .recovery import recover, recover_async
from .validator import validate
from .xid import Xid

__version__ = version("pgxid")

__all__ = (
    "ensure_xid",
    "from_wire_string",
    "recover",
    "recover_async",
    "to_wire_string",
    "validate",
    "BaseInterface",
    "ComponentTooLong",
    "ConfigurationError",
    "InvalidFormatId",
    "MalformedRow",
    "NonPrintableComponent",
    "PgXidError",
    "PostgresPool",
    "QueryFailed",
    "RecoveryError",
    "ValidationError",
    "Xid",
)
