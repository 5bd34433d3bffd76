"""
Formatting of resolved source locations.
"""

from typing import Optional, Union
from pathlib import PurePath
import os

from .format import UNKNOWN_SOURCE
from .mapping import SourceToken

PathLike = Union[str, 'os.PathLike[str]']


def relative_path(path: str, base_dir: PathLike) -> str:
    """Strip base_dir from path if path lies under it, else return path unchanged."""
    try:
        relative = PurePath(path).relative_to(PurePath(base_dir))
    except ValueError:
        return path

    # path equal to the base leaves nothing behind
    if not relative.parts:
        return ''
    return str(relative)


def render(token: Optional[SourceToken], base_dir: Optional[PathLike] = None) -> str:
    """Render a token as path:line:column with 1-based line and column.

    A missing token renders as the empty string. A token without a source
    path renders with the '<unknown>' placeholder. When base_dir is None the
    path is emitted exactly as stored in the source map.
    """
    if token is None:
        return ''

    if token.source_path is None:
        path = UNKNOWN_SOURCE
    elif base_dir is not None:
        path = relative_path(token.source_path, base_dir)
    else:
        path = token.source_path

    return f'{path}:{token.line + 1}:{token.column + 1}'
