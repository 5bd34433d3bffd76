import json

import pytest

from wasmresolve import load

B64 = 'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/'


def vlq(value):
    v = ((-value) << 1) | 1 if value < 0 else value << 1
    out = ''
    while True:
        digit = v & 0x1f
        v >>= 5
        if v:
            digit |= 0x20
        out += B64[digit]
        if not v:
            return out


def encode_mappings(lines):
    """Encode lines of absolute segments (dst_col[, src, src_line, src_col]) as vlq mappings."""
    src = src_line = src_col = 0
    encoded = []
    for segments in lines:
        dst_col = 0
        parts = []
        for seg in segments:
            field = vlq(seg[0] - dst_col)
            dst_col = seg[0]
            if len(seg) > 1:
                field += vlq(seg[1] - src) + vlq(seg[2] - src_line) + vlq(seg[3] - src_col)
                src, src_line, src_col = seg[1], seg[2], seg[3]
            parts.append(field)
        encoded.append(','.join(parts))
    return ';'.join(encoded)


def make_map(lines, sources, **extra):
    raw = {
        'version': 3,
        'sources': sources,
        'names': [],
        'mappings': encode_mappings(lines),
    }
    raw.update(extra)
    return json.dumps(raw).encode('utf-8')


# 0x2648d == 156813
WASM_SOURCES = ['/proj/src/lib.rs', '/other/dep.rs', None]
WASM_LINES = [[
    (100, 0, 0, 0),
    (0x2648d, 0, 41, 4),
    (157000, 1, 9, 2),
    (157100, 2, 3, 0),
]]


@pytest.fixture
def map_bytes():
    return make_map(WASM_LINES, WASM_SOURCES)


@pytest.fixture
def table(map_bytes):
    return load(map_bytes)


@pytest.fixture
def map_file(tmp_path, map_bytes):
    path = tmp_path / 'module.wasm.map'
    path.write_bytes(map_bytes)
    return path
