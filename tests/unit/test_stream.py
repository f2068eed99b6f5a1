"""Tests for stream framing."""

import pytest

from a2ui.core.stream import LineBuffer, StreamCounter


@pytest.mark.unit
def test_line_buffer_releases_complete_lines():
    """Test lines are released only when terminated."""
    buffer = LineBuffer()
    assert buffer.add(b'{"a"') == []
    assert buffer.add(b':1}\n{"b"') == [b'{"a":1}']
    assert buffer.pending == 4
    assert buffer.flush() == b'{"b"'
    assert buffer.flush() is None


@pytest.mark.unit
def test_line_buffer_skips_blank_lines():
    """Test blank and CRLF lines."""
    buffer = LineBuffer()
    assert buffer.add("a\r\n\n  \nb\n") == [b"a", b"b"]


@pytest.mark.unit
def test_line_buffer_drops_oversized_line():
    """Test the line size limit."""
    buffer = LineBuffer(max_line_size=4)
    assert buffer.add(b"123456") == []
    assert buffer.dropped == 1
    assert buffer.pending == 0


@pytest.mark.unit
def test_stream_counter():
    """Test counting."""
    counter = StreamCounter()
    counter.track(b"abc")
    counter.track(b"de")
    assert counter.reset() == (2, 5)
    assert counter.count == 0
