#!/usr/bin/env python3
"""
Resolve WebAssembly frame addresses in a backtrace

Reads a log (a file, or stdin when no file is given), finds frames like

    at wasm://wasm/000c5502:wasm-function[1060]:0x2648d

and appends the original source location looked up in the module's source
map:

    at wasm://wasm/000c5502:wasm-function[1060]:0x2648d src/lib.rs:42:5

Usage:
    ./wasm_resolve.py module.wasm.map crash.log
    node app.js 2>&1 | ./wasm_resolve.py -o -l module.wasm.map
"""

import argparse
import os
import sys

from wasmresolve import DeliveryMode, FormatError, RunContext, filter_stream, load_file
from wasmresolve.source import open_input


def build_context(args) -> RunContext:
    sink = sys.stdout if args.stdout else sys.stderr

    if args.absolute_path:
        base_dir = None
    elif args.base_dir:
        base_dir = os.path.abspath(args.base_dir)
    else:
        base_dir = os.getcwd()

    mode = DeliveryMode.LINE_BUFFERED if args.line_buffer else DeliveryMode.WHOLE_BUFFER
    return RunContext(sink, base_dir=base_dir, mode=mode)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Append source locations to wasm frame addresses in a backtrace',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resolve a saved log, print to stdout
  %(prog)s -o app.wasm.map crash.log

  # Filter a live process, one line at a time
  node app.js 2>&1 | %(prog)s -o -l app.wasm.map

Caveat:
  With --line-buffer a frame broken over two lines is not resolved.
"""
    )
    parser.add_argument('sourcemap', help='Path to source map')
    parser.add_argument('input', nargs='?',
                        help='Path to log containing wasm addresses (default: stdin)')
    parser.add_argument('-o', '--stdout', action='store_true',
                        help='Print filtered result to stdout instead of stderr')
    parser.add_argument('-p', '--absolute-path', action='store_true',
                        help='Print source paths as stored in the source map instead of '
                             'relative to the base directory')
    parser.add_argument('-l', '--line-buffer', action='store_true',
                        help='Filter line by line instead of waiting for the input to close')
    parser.add_argument('-C', '--base-dir', metavar='<dir>',
                        help='Base directory for relative paths (default: current directory)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose output')

    args = parser.parse_args(argv)
    ctx = build_context(args)

    # the source map must load before any input is consumed
    try:
        table = load_file(args.sourcemap)
    except FileNotFoundError:
        print(f"Error: Source map not found: {args.sourcemap}", file=sys.stderr)
        return 1
    except FormatError as e:
        print(f"Error: {args.sourcemap}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read source map {args.sourcemap}: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Loaded {len(table)} mappings from {args.sourcemap}", file=sys.stderr)

    try:
        source = open_input(args.input)
    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot open {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        with source:
            count = filter_stream(ctx, table, source)
    except UnicodeDecodeError as e:
        print(f"Error: Input is not valid utf-8: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Found {count} wasm frames", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
