"""Markup writer over an arbitrary text sink."""

import html
from contextlib import contextmanager
from typing import Iterator, Protocol

TAG_LEFT_CHAR = "<"
TAG_RIGHT_CHAR = ">"
SELF_CLOSING_TAG_END = " />"
END_TAG_LEFT_CHARS = "</"


class TextSink(Protocol):
    """Anything with a write(str) method (files, io.StringIO, ...)."""

    def write(self, text: str) -> object:
        ...


class MarkupWriter:
    """
    Sequential writer for tag/attribute markup.

    Indentation is applied lazily: after write_line() the next write is
    prefixed with ``indent_text`` repeated ``indent`` times, so changing the
    indent between a line break and the following tag still takes effect.

    Examples:
        >>> import io
        >>> sink = io.StringIO()
        >>> w = MarkupWriter(sink)
        >>> w.write_begin_tag("asp:Label")
        >>> w.write_attribute("Text", "hi")
        >>> w.write_self_closing_tag_close()
        >>> sink.getvalue()
        '<asp:Label Text="hi" />'
    """

    def __init__(
        self,
        sink: TextSink,
        indent_text: str = "\t",
        newline: str = "\n",
        encode_attributes: bool = False,
    ):
        self.sink = sink
        self.indent_text = indent_text
        self.newline = newline
        self.encode_attributes = encode_attributes
        self._indent = 0
        self._tabs_pending = True

    @property
    def indent(self) -> int:
        """Current nesting depth."""
        return self._indent

    @indent.setter
    def indent(self, value: int) -> None:
        self._indent = max(0, value)

    @property
    def at_line_start(self) -> bool:
        """True when nothing has been written since the last line break."""
        return self._tabs_pending

    @contextmanager
    def indented(self) -> Iterator["MarkupWriter"]:
        """Increase indentation for the duration of the block, on every exit path."""
        self.indent += 1
        try:
            yield self
        finally:
            self.indent -= 1

    def _output_tabs(self) -> None:
        if self._tabs_pending:
            self.sink.write(self.indent_text * self._indent)
            self._tabs_pending = False

    def write(self, text: str) -> None:
        """Write raw text."""
        if not text:
            return
        self._output_tabs()
        self.sink.write(text)

    def write_line(self, text: str = "") -> None:
        """Write optional text followed by a line break."""
        if text:
            self.write(text)
        self.sink.write(self.newline)
        self._tabs_pending = True

    def write_begin_tag(self, name: str) -> None:
        """Open a begin tag, leaving it ready for attributes."""
        self.write(TAG_LEFT_CHAR + name)

    def write_attribute(self, name: str, value: str, encode: bool | None = None) -> None:
        """Append ``name="value"`` to the open begin tag."""
        if encode is None:
            encode = self.encode_attributes
        if encode:
            value = html.escape(value, quote=True)
        self.write(f' {name}="{value}"')

    def write_full_begin_tag_close(self) -> None:
        """Close an open begin tag with ``>``."""
        self.write(TAG_RIGHT_CHAR)

    def write_self_closing_tag_close(self) -> None:
        """Close an open begin tag with `` />``."""
        self.write(SELF_CLOSING_TAG_END)

    def write_full_begin_tag(self, name: str) -> None:
        """Write a complete ``<name>`` tag."""
        self.write(TAG_LEFT_CHAR + name + TAG_RIGHT_CHAR)

    def write_end_tag(self, name: str) -> None:
        """Write ``</name>``."""
        self.write(END_TAG_LEFT_CHARS + name + TAG_RIGHT_CHAR)

    def flush(self) -> None:
        """Flush the underlying sink when it supports flushing."""
        flush = getattr(self.sink, "flush", None)
        if callable(flush):
            flush()
