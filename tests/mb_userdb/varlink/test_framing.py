"""Tests for null-byte frame scanning."""

from collections.abc import Callable

import pytest

from mb_userdb.varlink.framing import iter_frames


def _reader(data: bytes, chunk_size: int) -> Callable[[], bytes]:
    """Byte source returning ``data`` in fixed-size chunks, then b""."""
    chunks = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)]
    it = iter(chunks)
    return lambda: next(it, b"")


class TestFrameSplitting:
    """Frames are the bytes between 0x00 delimiters."""

    @pytest.mark.parametrize("chunk_size", [1, 3, 7, 4096])
    def test_reproduces_frames_in_order(self, chunk_size: int) -> None:
        """Frames come back unchanged regardless of how reads are chunked."""
        frames = [b'{"a":1}', b"second", b"x" * 100, b"last"]
        data = b"\x00".join(frames) + b"\x00"
        assert list(iter_frames(_reader(data, chunk_size))) == frames

    def test_final_frame_without_delimiter(self) -> None:
        """Undelimited bytes at end of stream form the final frame."""
        data = b"one\x00two\x00three"
        assert list(iter_frames(_reader(data, 4))) == [b"one", b"two", b"three"]

    def test_delimiter_not_included(self) -> None:
        """No frame contains the delimiter byte."""
        frames = list(iter_frames(_reader(b"a\x00b\x00", 1)))
        assert all(b"\x00" not in f for f in frames)

    def test_empty_stream(self) -> None:
        """Empty source yields nothing."""
        assert list(iter_frames(_reader(b"", 1))) == []

    def test_consecutive_delimiters_yield_empty_frame(self) -> None:
        """An empty frame between two delimiters is preserved."""
        assert list(iter_frames(_reader(b"a\x00\x00b\x00", 2))) == [b"a", b"", b"b"]

    def test_trailing_delimiter_adds_no_empty_frame(self) -> None:
        """A delimiter at end of stream does not produce an extra empty frame."""
        assert list(iter_frames(_reader(b"a\x00", 8))) == [b"a"]


class TestLaziness:
    """Reads are pulled only as frames are consumed."""

    def test_stops_reading_when_consumer_stops(self) -> None:
        """After taking the first frame, the source is not read further."""
        reads: list[int] = []
        chunks = iter([b"first\x00", b"second\x00", b"third\x00"])

        def read() -> bytes:
            reads.append(1)
            return next(chunks, b"")

        frames = iter_frames(read)
        assert next(frames) == b"first"
        frames.close()
        assert len(reads) == 1

    def test_read_error_propagates(self) -> None:
        """An exception from the source stops frame production."""
        chunks = iter([b"ok\x00partial"])

        def read() -> bytes:
            chunk = next(chunks, None)
            if chunk is None:
                raise OSError("boom")
            return chunk

        frames = iter_frames(read)
        assert next(frames) == b"ok"
        with pytest.raises(OSError, match="boom"):
            next(frames)


class TestLargeFrames:
    """Frames spanning many reads."""

    def test_frame_split_across_many_reads(self) -> None:
        """A long frame delivered byte by byte is reassembled, and the next frame follows it."""
        big = b"y" * 50_000
        data = big + b"\x00" + b"tail\x00"
        assert list(iter_frames(_reader(data, 1))) == [big, b"tail"]

    def test_delimiter_in_its_own_read(self) -> None:
        """A delimiter arriving alone ends the buffered frame."""
        chunks = iter([b"abc", b"def", b"\x00", b"g"])
        assert list(iter_frames(lambda: next(chunks, b""))) == [b"abcdef", b"g"]
