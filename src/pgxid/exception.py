from typing import Optional


class PgXidError(Exception):
    """Base exception for all pgxid errors"""


class ValidationError(PgXidError, ValueError):
    """Raised when an XA triple breaks the component rules"""

    def __init__(self, message: str, component: Optional[str] = None):
        super().__init__(message)
        self.component = component


class InvalidFormatId(ValidationError):
    """Raised when format_id is not a non-negative 32-bit integer"""

    def __init__(self, message: str):
        super().__init__(message, "format_id")


class ComponentTooLong(ValidationError):
    """Raised when gtrid or bqual is longer than 64 bytes"""


class NonPrintableComponent(ValidationError):
    """Raised when gtrid or bqual contains a non printable byte"""


class RecoveryError(PgXidError):
    """Base exception for errors while recovering prepared transactions"""


class QueryFailed(RecoveryError):
    """Raised when the recovery query cannot be issued or fetched"""


class MalformedRow(RecoveryError):
    """Raised when a recovery row does not have the expected columns"""

    def __init__(self, message: str, index: int):
        super().__init__(message)
        self.index = index


class ConfigurationError(PgXidError):
    """Raised when a connection interface is given bad settings"""
