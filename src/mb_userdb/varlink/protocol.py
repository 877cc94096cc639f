"""Wire protocol for userdb queries.

Request (one per connection, 0x00-terminated):
    {"method": "io.systemd.UserDatabase.GetGroupRecord", "parameters": {"service": "io.systemd.NameServiceSwitch"}, "more": true}

Reply (zero or more, each 0x00-terminated):
    {"parameters": {"record": {"groupName": "wheel", "gid": 10}}, "continues": true}
    {"error": "io.systemd.UserDatabase.NoRecordFound", "parameters": {}}
"""

import json
from dataclasses import dataclass
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from mb_userdb.errors import ProtocolError

GET_GROUP_RECORD = "io.systemd.UserDatabase.GetGroupRecord"
GET_USER_RECORD = "io.systemd.UserDatabase.GetUserRecord"
NO_RECORD_FOUND = "io.systemd.UserDatabase.NoRecordFound"

Int64 = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]


@dataclass(frozen=True)
class QueryRequest:
    """Query for a userdb method. ``more`` asks the service to stream every candidate record."""

    method: str
    service: str
    more: bool = True


def encode_request(req: QueryRequest) -> bytes:
    """Serialize a QueryRequest to compact JSON bytes, without the frame terminator."""
    payload = {"method": req.method, "parameters": {"service": req.service}, "more": req.more}
    return json.dumps(payload, separators=(",", ":")).encode()


class WireRecord(BaseModel):
    """Base for records as sent by the service. Unknown fields are ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class GroupRecord(WireRecord):
    """Group record as sent by the service."""

    group_name: StrictStr = Field(alias="groupName")
    gid: Int64


class UserRecord(WireRecord):
    """User record as sent by the service."""

    user_name: StrictStr = Field(alias="userName")
    real_name: StrictStr = Field(default="", alias="realName")
    uid: Int64
    gid: Int64
    home_directory: StrictStr = Field(default="", alias="homeDirectory")


R = TypeVar("R", bound=WireRecord)


class ReplyParameters(BaseModel, Generic[R]):
    """The ``parameters`` object of a reply."""

    model_config = ConfigDict(frozen=True)

    record: R | None = None


class Reply(BaseModel, Generic[R]):
    """One decoded reply frame."""

    model_config = ConfigDict(frozen=True)

    parameters: ReplyParameters[R] | None = None
    continues: StrictBool = False
    error: StrictStr | None = None

    @property
    def record(self) -> R | None:
        """The carried record, if any."""
        return self.parameters.record if self.parameters is not None else None


def decode_reply(frame: bytes, record_type: type[R]) -> Reply[R]:
    """Deserialize a reply frame carrying a ``record_type`` record.

    Raises:
        ProtocolError: Frame is not valid JSON or does not match the reply shape (code: ``invalid_frame``).

    """
    try:
        return Reply[record_type].model_validate_json(frame)  # type: ignore[valid-type]
    except ValueError as e:
        raise ProtocolError("invalid_frame", f"Malformed reply frame: {e}") from e
