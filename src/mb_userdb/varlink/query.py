"""Record query: drive one exchange and pick at most one matching record."""

import logging
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager
from typing import Protocol

from mb_userdb.config import DEFAULT_SERVICE
from mb_userdb.errors import ProtocolError, ServiceError
from mb_userdb.varlink.protocol import NO_RECORD_FOUND, QueryRequest, R, decode_reply, encode_request

logger = logging.getLogger(__name__)

Predicate = Callable[[R], bool]


class Exchanger(Protocol):
    """Anything that runs one request/reply exchange, like FramedTransport."""

    def exchange(self, payload: bytes) -> AbstractContextManager[Iterator[bytes]]: ...


def query_record(
    transport: Exchanger,
    method: str,
    record_type: type[R],
    predicate: Predicate[R],
    *,
    service: str = DEFAULT_SERVICE,
) -> R | None:
    """Query ``method`` and return the first streamed record matching ``predicate``.

    Frames are processed in arrival order. After a match, the remaining frames
    are still decoded until the service stops the stream, but never replace
    the first match. Consumption stops at the first reply with
    ``continues=false`` or at end of stream.

    Args:
        transport: Transport to run the exchange on.
        method: Varlink method name, e.g. ``io.systemd.UserDatabase.GetUserRecord``.
        record_type: Wire record model carried by the replies.
        predicate: Returns True for the wanted record.
        service: Varlink service name sent in the request parameters.

    Returns:
        The matched record, or None if the stream ended without a match.

    Raises:
        TransportError: Socket failure; propagated from the transport.
        ProtocolError: A frame was malformed or carried no record.
        ServiceError: The service replied with an error other than NoRecordFound.

    """
    request = QueryRequest(method=method, service=service)
    logger.debug("Query %s (service %s)", method, service)

    match: R | None = None
    frames_seen = 0
    with transport.exchange(encode_request(request)) as frames:
        for frame in frames:
            frames_seen += 1
            reply = decode_reply(frame, record_type)
            if reply.error is not None:
                if reply.error == NO_RECORD_FOUND:
                    break
                raise ServiceError(reply.error, f"Service replied with error {reply.error}.")
            record = reply.record
            if record is None:
                raise ProtocolError("missing_record", "Reply carries neither a record nor an error.")
            if match is None and predicate(record):
                match = record
            if not reply.continues:
                break

    logger.debug("Query %s: %d frame(s), %s", method, frames_seen, "matched" if match is not None else "no match")
    return match
