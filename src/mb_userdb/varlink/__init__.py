"""Varlink client for the userdb identity service: framing, transport, and queries."""

from mb_userdb.varlink.protocol import GroupRecord as GroupRecord
from mb_userdb.varlink.protocol import UserRecord as UserRecord
from mb_userdb.varlink.query import query_record as query_record
from mb_userdb.varlink.transport import FramedTransport as FramedTransport
