"""Unit tests for the buffered `OutputChannel`."""

from rawscreen.core.OutputChannel import OutputChannel
from tests.stubs import CountingStream


def test_writes_are_held_until_flush(output: OutputChannel, stream: CountingStream) -> None:
    output.write(b"abc")
    output.write_text("déf")
    assert stream.getvalue() == b""
    assert output.pending == len(b"abc") + len("déf".encode("utf-8"))

    output.flush()
    assert stream.getvalue() == "abcdéf".encode("utf-8")
    assert stream.flushes == 1
    assert output.pending == 0


def test_flush_without_writes_is_silent(output: OutputChannel, stream: CountingStream) -> None:
    output.flush()
    output.write(b"x")
    output.flush()
    output.flush()
    assert stream.writes == 1
    assert stream.flushes == 1


def test_overflow_writes_through_and_flush_still_flushes() -> None:
    stream = CountingStream()
    channel = OutputChannel(stream, buffer_size=4)
    channel.write(b"12345")
    assert stream.getvalue() == b"12345"
    assert stream.flushes == 0

    channel.flush()
    assert stream.flushes == 1
    channel.flush()
    assert stream.flushes == 1


def test_write_text_replaces_surrogates(output: OutputChannel, stream: CountingStream) -> None:
    output.write_text("a\udce9b")
    output.flush()
    assert stream.getvalue() == b"a?b"
