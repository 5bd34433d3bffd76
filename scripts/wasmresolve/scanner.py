"""
Locating wasm frame addresses in free-form text.
"""

from typing import Callable, Iterator

from .format import FRAME_PATTERN


class Match:
    """A frame token found in a text unit."""

    def __init__(self, text: str, address: str, start: int, end: int):
        self.text = text
        self.address = address
        self.start = start
        self.end = end

    def __repr__(self) -> str:
        return f'Match(text={self.text!r}, address={self.address!r})'


def scan(text: str) -> Iterator[Match]:
    """Yield every frame token in text, left to right."""
    for m in FRAME_PATTERN.finditer(text):
        yield Match(m.group(0), m.group(1), m.start(), m.end())


def annotate(text: str, resolve: Callable[[str], str]) -> str:
    """Append ' <resolve(address)>' after every frame token in text.

    The token itself is kept as is; a failed resolution still adds the
    separating space.
    """
    parts = []
    pos = 0
    for match in scan(text):
        parts.append(text[pos:match.end])
        parts.append(' ')
        parts.append(resolve(match.address))
        pos = match.end

    if not parts:
        return text

    parts.append(text[pos:])
    return ''.join(parts)
