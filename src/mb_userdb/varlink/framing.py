"""Null-byte frame scanning over an arbitrary byte source.

Varlink messages are JSON objects terminated by a single ``0x00`` byte rather
than a newline. The last message of a stream may arrive without its
terminator; it is still returned as a frame.
"""

from collections.abc import Callable, Iterator

FRAME_DELIMITER = b"\x00"


def iter_frames(read: Callable[[], bytes]) -> Iterator[bytes]:
    """Yield frames from ``read()`` chunks until the source returns ``b""``.

    The delimiter is consumed and never part of a frame. Bytes left over at
    end of stream form one final frame; an empty remainder yields nothing.
    Reading stops as soon as the consumer stops iterating.
    """
    buf = bytearray()
    while chunk := read():
        start = len(buf)  # bytes already in buf hold no delimiter
        buf += chunk
        while (end := buf.find(FRAME_DELIMITER, start)) >= 0:
            frame = bytes(buf[:end])
            del buf[: end + 1]
            start = 0
            yield frame
    if buf:
        yield bytes(buf)
