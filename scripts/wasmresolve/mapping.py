"""
Source map loading and address lookup.

A wasm source map describes the code section as a single generated line:
every mapping entry sits on line 0 and its column is the byte offset into
the module. Looking up a frame address is therefore a nearest-preceding
search over the line 0 columns.
"""

from typing import List, NamedTuple, Optional, Tuple
from bisect import bisect_right
import json
import os
import string

import sourcemap

from .format import HEX_PREFIX, U32_MAX, XSSI_PREFIX


class FormatError(ValueError):
    """Raised when a byte stream is not a well-formed source map."""


class SourceToken(NamedTuple):
    """Original source location of a mapping entry (0-based line and column)."""
    source_path: Optional[str]
    line: int
    column: int


class MappingTable:
    """Decoded source map supporting point lookups by module offset."""

    def __init__(self, entries: List[Tuple[Tuple[int, int], SourceToken]]):
        entries = sorted(entries, key=lambda e: e[0])
        self._keys = [key for key, _ in entries]
        self._tokens = [token for _, token in entries]

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f'MappingTable(entries={len(self._tokens)})'

    def lookup(self, address: int) -> Optional[SourceToken]:
        """Find the entry covering or most closely preceding an offset."""
        if address < 0 or address > U32_MAX:
            return None

        i = bisect_right(self._keys, (0, address))
        if not i:
            return None
        return self._tokens[i - 1]

    def resolve(self, text: str) -> Optional[SourceToken]:
        """Look up a raw address string as captured from a frame."""
        address = parse_address(text)
        if address is None:
            return None
        return self.lookup(address)


def parse_address(text: str) -> Optional[int]:
    """Parse a decimal or 0x-prefixed hexadecimal address.

    Returns None for anything that is not a plain number.
    """
    if text.startswith(HEX_PREFIX):
        digits = text[len(HEX_PREFIX):]
        if not digits or any(c not in string.hexdigits for c in digits):
            return None
        return int(digits, 16)

    if not text or any(c not in string.digits for c in text):
        return None
    return int(text, 10)


def _decode_json(data: bytes) -> dict:
    try:
        text = data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise FormatError(f'source map is not valid utf-8: {e}') from e

    if text.startswith(XSSI_PREFIX):
        # the guard occupies the whole first line
        text = text.split('\n', 1)[1] if '\n' in text else ''

    try:
        raw = json.loads(text)
    except ValueError as e:
        raise FormatError(f'source map is not valid json: {e}') from e

    if not isinstance(raw, dict):
        raise FormatError('source map must be a json object')
    if 'sections' in raw:
        raise FormatError('index source maps with sections are not supported')
    if not isinstance(raw.get('sources'), list):
        raise FormatError('source map has no "sources" list')
    if any(s is not None and not isinstance(s, str) for s in raw['sources']):
        raise FormatError('source map "sources" must hold strings or null')
    if not isinstance(raw.get('mappings'), str):
        raise FormatError('source map has no "mappings" string')
    if raw.get('names') is None:
        raw['names'] = []
    elif not isinstance(raw['names'], list):
        raise FormatError('source map "names" must be a list')

    # sources may be null; apply the root here so null entries stay null
    root = raw.pop('sourceRoot', None)
    if root:
        if not isinstance(root, str):
            raise FormatError('source map "sourceRoot" must be a string')
        raw['sources'] = [s if s is None else os.path.join(root, s)
                          for s in raw['sources']]
    return raw


def load(data: bytes) -> MappingTable:
    """Decode a serialized source map into a MappingTable.

    Args:
        data: Raw bytes of a version 3 json source map

    Raises:
        FormatError: if the data is not a well-formed source map
    """
    raw = _decode_json(data)

    # the decoder only accepts text, so hand it the normalized map
    try:
        index = sourcemap.loads(json.dumps(raw))
        entries = [((token.dst_line, token.dst_col),
                    SourceToken(token.src, token.src_line, token.src_col))
                   for token in index]
    except (sourcemap.SourceMapDecodeError, ValueError, LookupError, TypeError) as e:
        # bad vlq digits surface as lookup errors
        raise FormatError(f'invalid source map mappings: {e}') from e
    except (AssertionError, AttributeError) as e:
        # negative values fail an assert whose handler reads e.message
        raise FormatError(f'invalid source map mappings: negative value ({e})') from e

    return MappingTable(entries)


def load_file(path: str) -> MappingTable:
    """Load a source map from a file. Open failures propagate as OSError."""
    with open(path, 'rb') as f:
        data = f.read()
    return load(data)
