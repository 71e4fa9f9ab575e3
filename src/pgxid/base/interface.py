from __future__ import annotations

from abc import ABC, abstractmethod
from collections import namedtuple
from typing import Optional
from urllib.parse import urlparse

from pgxid.exception import ConfigurationError

UrlMapping = namedtuple("UrlMapping", ("key", "cast"))


URLPARSE_MAPPING = {
    "hostname": UrlMapping("_host", str),
    "username": UrlMapping("_user", str),
    "password": UrlMapping("_password", str),
    "port": UrlMapping("_port", int),
    "path": UrlMapping("_db", lambda value: value.replace("/", "")),
    "query": UrlMapping("_query", str),
}
URLPARSE_DEFAULTS = {
    "hostname": "localhost",
    "port": 5432,
}


class BaseInterface(ABC):
    """Connection settings for a database that holds prepared transactions"""

    scheme = "postgres"

    @abstractmethod
    def _setup_pool(self): ...

    @abstractmethod
    async def open(self): ...

    @abstractmethod
    async def close(self): ...

    @abstractmethod
    def connection(self, timeout: Optional[float] = None): ...

    def __init__(
        self,
        dsn: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        db: Optional[str] = None,
        query: Optional[str] = None,
        min_size: int = 1,
        max_size: Optional[int] = None,
    ) -> None:
        """Interface initialization.

        Either a `dsn` or the individual connection parts may be given, but
        not a `dsn` together with a `host`. Parts missing from the `dsn` are
        filled with defaults.

        Args:
            dsn (str, optional): Data source name
            host (str, optional): Database address URL or IP.
                Defaults to `localhost`
            port (int, optional): Database port. Defaults to 5432
            user (str, optional): Database user
            password (str, optional): Database password
            db (str, optional): Database name
            query (str, optional): Extra DSN query parameters.
                Defaults to `None`
            min_size (int, optional): Minimum number of connections in pool.
                Defaults to 1
            max_size (int, optional): Maximum number of connections in pool.
                Defaults to `None`

        Raises:
            ConfigurationError: If the settings are conflicting or invalid
        """

        if dsn and host:
            raise ConfigurationError("Cannot connect using host and dsn")

        if port is not None and (
            not isinstance(port, int) or port not in range(0, 65536)
        ):
            raise ConfigurationError(
                "port: must be an integer between 0 and 65535"
            )

        if host is not None and (not isinstance(host, str) or not host):
            raise ConfigurationError(
                "host: must be a string at least 1 character long"
            )

        if password is not None and (
            not isinstance(password, str) or not password
        ):
            raise ConfigurationError(
                "password: must be a string at least 1 character long"
            )

        if min_size < 0:
            raise ConfigurationError("min_size: must not be negative")

        if max_size is not None and max_size < min_size:
            raise ConfigurationError(
                "max_size: must not be smaller than min_size"
            )

        self._dsn = dsn
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._db = db
        self._query = query
        self._min_size = min_size
        self._max_size = max_size
        self._full_dsn: Optional[str] = None

        self._populate_connection_args()
        self._populate_dsn()
        self._setup_pool()

    def __str__(self) -> str:
        return f"<{self.__class__.__name__} {self.dsn}>"

    def _populate_connection_args(self):
        parts = urlparse(self._dsn or "")
        for key, mapping in URLPARSE_MAPPING.items():
            if getattr(self, mapping.key):
                continue
            value = getattr(parts, key, None) if self._dsn else None
            if not value:
                value = URLPARSE_DEFAULTS.get(key)
            if value:
                setattr(self, mapping.key, mapping.cast(value))

    def _populate_dsn(self):
        credentials = (
            f"{self.user}:{self.password}@"
            if self.password
            else f"{self.user}@" if self.user else ""
        )
        masked = (
            f"{self.user}:...@"
            if self.password
            else f"{self.user}@" if self.user else ""
        )
        location = f"{self.host}:{self.port}/{self.db or ''}"
        self._dsn = f"{self.scheme}://{masked}{location}"
        self._full_dsn = f"{self.scheme}://{credentials}{location}"
        self._full_dsn += f"?{self._query}" if self._query else ""

    @property
    def dsn(self):
        return self._dsn

    @property
    def host(self):
        return self._host

    @property
    def port(self):
        return self._port

    @property
    def user(self):
        return self._user

    @property
    def password(self):
        return self._password

    @property
    def db(self):
        return self._db

    @property
    def full_dsn(self):
        return self._full_dsn

    @property
    def min_size(self):
        return self._min_size

    @property
    def max_size(self):
        return self._max_size
