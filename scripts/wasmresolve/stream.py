"""
Stream filter driving the scanner, the mapping table and the renderer.
"""

from enum import Enum
from typing import Optional, TextIO

from .mapping import MappingTable
from .render import PathLike, render
from .scanner import annotate
from .source import Input


class DeliveryMode(Enum):
    WHOLE_BUFFER = 'whole'
    LINE_BUFFERED = 'line'


class RunContext:
    """Settings for one filter run."""

    def __init__(self, sink: TextIO, base_dir: Optional[PathLike] = None,
                 mode: DeliveryMode = DeliveryMode.WHOLE_BUFFER):
        self.sink = sink
        self.base_dir = base_dir
        self.mode = mode

    def __repr__(self) -> str:
        return f'RunContext(base_dir={self.base_dir}, mode={self.mode.name})'


class _Resolver:
    """Resolves captured addresses to annotation text, counting matches."""

    def __init__(self, table: MappingTable, base_dir: Optional[PathLike]):
        self.table = table
        self.base_dir = base_dir
        self.count = 0

    def __call__(self, address: str) -> str:
        self.count += 1
        return render(self.table.resolve(address), self.base_dir)


def filter_text(text: str, table: MappingTable, base_dir: Optional[PathLike] = None) -> str:
    """Rewrite one unit of text with the location of every frame address."""
    return annotate(text, _Resolver(table, base_dir))


def filter_stream(ctx: RunContext, table: MappingTable, source: Input) -> int:
    """Filter source into ctx.sink. Returns the number of frame tokens seen.

    In line-buffered mode every line is written and flushed before the next
    one is read, so a frame split over two lines is never recognized.
    """
    resolver = _Resolver(table, ctx.base_dir)

    if ctx.mode == DeliveryMode.WHOLE_BUFFER:
        text = source.read_to_string()
        ctx.sink.write(annotate(text, resolver))
        ctx.sink.flush()
        return resolver.count

    while True:
        line = source.read_line()
        if not line:
            break
        ctx.sink.write(annotate(line, resolver))
        ctx.sink.flush()

    return resolver.count
