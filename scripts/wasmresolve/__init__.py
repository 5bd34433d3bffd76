"""
WebAssembly frame address resolver.

Rewrites crash logs so that every wasm frame address is followed by the
source location it maps to.
"""

from .mapping import MappingTable, SourceToken, FormatError, load, load_file
from .stream import DeliveryMode, RunContext, filter_stream, filter_text

__all__ = ['MappingTable', 'SourceToken', 'FormatError', 'load', 'load_file',
           'DeliveryMode', 'RunContext', 'filter_stream', 'filter_text']
