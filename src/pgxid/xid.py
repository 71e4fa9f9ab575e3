from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pgxid.exception import PgXidError, ValidationError
from pgxid.validator import validate


@dataclass(frozen=True)
class Xid:
    """A transaction identifier used for two phase commit.

    An xid is either an XA triple, or an "unparsed" identifier holding a
    transaction name that was not generated in the XA format (for example
    one found in ``pg_prepared_xacts`` that some other client created). An
    unparsed xid has ``format_id`` and ``bqual`` set to ``None`` and the
    whole name in ``gtrid``.

    The ``prepared``, ``owner`` and ``database`` attributes are only
    populated on xids returned by recovery.

    Example:

    ```python
    xid = Xid(42, "transfer-0001", "accounts")
    str(xid)  # '42_dHJhbnNmZXItMDAwMQ==_YWNjb3VudHM='
    Xid.from_string(str(xid)) == xid  # True
    ```
    """

    format_id: Optional[int]
    gtrid: str
    bqual: Optional[str]
    prepared: Any = field(default=None, init=False, compare=False)
    owner: Optional[str] = field(default=None, init=False, compare=False)
    database: Optional[str] = field(default=None, init=False, compare=False)
    _recovered: bool = field(
        default=False, init=False, compare=False, repr=False
    )

    def __post_init__(self):
        if self.format_id is None:
            if self.bqual == "":
                object.__setattr__(self, "bqual", None)
            elif self.bqual is not None:
                raise ValidationError(
                    "bqual must be empty when format_id is None", "bqual"
                )
            if not isinstance(self.gtrid, str):
                raise TypeError(
                    "gtrid must be a string, "
                    f"got {type(self.gtrid).__name__}"
                )
        else:
            validate(self.format_id, self.gtrid, self.bqual)

    def __len__(self) -> int:
        return 3

    def __getitem__(self, item: int) -> Union[int, str, None]:
        if item < 0:
            item += 3
        if item == 0:
            return self.format_id
        if item == 1:
            return self.gtrid
        if item == 2:
            return self.bqual
        raise IndexError("index out of range")

    def __str__(self) -> str:
        from pgxid.codec import to_wire_string

        return to_wire_string(self)

    @classmethod
    def from_string(cls, s: str) -> Xid:
        """Build an xid from its PostgreSQL transaction name.

        If the string is in the XA format generated by this package (or by
        pgjdbc), the triple is unpacked. Otherwise an unparsed xid wrapping
        the string is returned.
        """
        from pgxid.codec import from_wire_string

        return from_wire_string(s)

    @classmethod
    def unparsed(cls, s: str) -> Xid:
        return cls(None, s, None)

    @property
    def is_unparsed(self) -> bool:
        return self.format_id is None

    @property
    def is_recovered(self) -> bool:
        return self._recovered

    def _attach_recovery_info(
        self, prepared: Any, owner: Optional[str], database: Optional[str]
    ) -> None:
        if self._recovered:
            raise PgXidError(
                f"Recovery info already attached to xid {self.gtrid!r}"
            )
        object.__setattr__(self, "prepared", prepared)
        object.__setattr__(self, "owner", owner)
        object.__setattr__(self, "database", database)
        object.__setattr__(self, "_recovered", True)
