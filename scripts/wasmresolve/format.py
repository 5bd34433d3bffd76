"""
Frame address format definitions and constants.
"""

import re

# "wasm://wasm/000c5502:wasm-function[1060]:0x2648d"
FRAME_PATTERN = re.compile(r'wasm://.*:.*:((?:0x)?[0-9a-fA-F]+)')

HEX_PREFIX = '0x'

# source map columns are 32-bit
U32_MAX = 0xFFFFFFFF

UNKNOWN_SOURCE = '<unknown>'

# optional guard line some servers prepend to json payloads
XSSI_PREFIX = ")]}"
