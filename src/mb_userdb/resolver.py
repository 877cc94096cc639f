"""User and group lookups against the userdb identity service."""

import threading
from dataclasses import dataclass

from mb_userdb.config import Config
from mb_userdb.varlink.protocol import GET_GROUP_RECORD, GET_USER_RECORD, GroupRecord, R, UserRecord
from mb_userdb.varlink.query import Predicate, query_record
from mb_userdb.varlink.transport import FramedTransport


@dataclass(frozen=True, slots=True)
class Group:
    """Resolved group. ``gid`` is the decimal rendering of the numeric id."""

    name: str
    gid: str


@dataclass(frozen=True, slots=True)
class User:
    """Resolved user. ``uid`` and ``gid`` are decimal renderings of the numeric ids."""

    uid: str
    gid: str
    username: str
    name: str
    home_dir: str


class Resolver:
    """Looks up users and groups. Every lookup opens its own connection."""

    def __init__(self, cfg: Config) -> None:
        """Initialize resolver with configuration.

        Args:
            cfg: Application configuration (provides socket path, service name, timeout).

        """
        self._cfg = cfg
        self._in_flight: set[FramedTransport] = set()  # transports of lookups currently running, for abort()
        self._lock = threading.Lock()

    def abort(self) -> None:
        """Cancel every lookup currently in flight on this resolver.

        Safe to call from another thread. Each cancelled lookup raises a
        TransportError with code ``cancelled``. Lookups started afterwards
        are not affected.
        """
        with self._lock:
            transports = list(self._in_flight)
        for transport in transports:
            transport.abort()

    def lookup_group(self, name: str) -> Group | None:
        """Find a group by exact name."""
        return self._query_group(lambda r: r.group_name == name)

    def lookup_group_id(self, gid: str) -> Group | None:
        """Find a group by id, compared as a decimal string ("007" never matches 7)."""
        return self._query_group(lambda r: str(r.gid) == gid)

    def lookup_user(self, username: str) -> User | None:
        """Find a user by exact username."""
        return self._query_user(lambda r: r.user_name == username)

    def lookup_user_id(self, uid: str) -> User | None:
        """Find a user by id, compared as a decimal string."""
        return self._query_user(lambda r: str(r.uid) == uid)

    def _query_group(self, predicate: Predicate[GroupRecord]) -> Group | None:
        record = self._query(GET_GROUP_RECORD, GroupRecord, predicate)
        if record is None:
            return None
        return Group(name=record.group_name, gid=str(record.gid))

    def _query_user(self, predicate: Predicate[UserRecord]) -> User | None:
        record = self._query(GET_USER_RECORD, UserRecord, predicate)
        if record is None:
            return None
        return User(
            uid=str(record.uid),
            gid=str(record.gid),
            username=record.user_name,
            name=record.real_name,
            home_dir=record.home_directory,
        )

    def _query(self, method: str, record_type: type[R], predicate: Predicate[R]) -> R | None:
        transport = FramedTransport(self._cfg.socket_path, timeout=self._cfg.timeout)
        with self._lock:
            self._in_flight.add(transport)
        try:
            return query_record(transport, method, record_type, predicate, service=self._cfg.service)
        finally:
            with self._lock:
                self._in_flight.discard(transport)
