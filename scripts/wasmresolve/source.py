"""
Input providers for the stream filter.

Both providers read text as utf-8 without newline translation so that the
filtered output keeps the exact line terminators of the input.
"""

from typing import Optional, TextIO
import io
import sys


class Input:
    """Text input read either all at once or one line at a time."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def read_to_string(self) -> str:
        """Read until the end of input."""
        return self._stream.read()

    def read_line(self) -> str:
        """Read one line including its terminator. Returns '' at end of input."""
        return self._stream.readline()

    def close(self):
        pass

    def __enter__(self) -> 'Input':
        return self

    def __exit__(self, *exc):
        self.close()


class FileInput(Input):
    """Input backed by a named file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(open(path, 'r', encoding='utf-8', newline=''))

    def close(self):
        self._stream.close()

    def __repr__(self) -> str:
        return f'FileInput(path={self.path})'


class StdinInput(Input):
    """Input backed by the process standard input."""

    def __init__(self):
        stream = sys.stdin
        buffer = getattr(stream, 'buffer', None)
        if buffer is not None:
            stream = io.TextIOWrapper(buffer, encoding='utf-8', newline='')
        super().__init__(stream)

    def close(self):
        # stdin belongs to the process; only drop our wrapper
        if isinstance(self._stream, io.TextIOWrapper) and self._stream is not sys.stdin:
            self._stream.detach()

    def __repr__(self) -> str:
        return 'StdinInput()'


def open_input(path: Optional[str] = None) -> Input:
    """Open the named file, or standard input when no path is given."""
    if path is None:
        return StdinInput()
    return FileInput(path)
