"""Resolve users and groups through the systemd userdb varlink service."""

from mb_userdb.config import Config as Config
from mb_userdb.errors import ProtocolError as ProtocolError
from mb_userdb.errors import ServiceError as ServiceError
from mb_userdb.errors import TransportError as TransportError
from mb_userdb.errors import UserdbError as UserdbError
from mb_userdb.resolver import Group as Group
from mb_userdb.resolver import Resolver as Resolver
from mb_userdb.resolver import User as User
