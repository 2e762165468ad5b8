"""
reader.py

Responsibility: turn whatever the caller hands a parser into plain text lines.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import IO, Union

from changelog_conv.errors import EncodingError

Source = Union[IO[str], IO[bytes], Iterable[str], Iterable[bytes]]


def iter_lines(source: Source) -> Iterator[str]:
    """
    Yield lines without their line terminators. Bytes are decoded as UTF-8.

    Raises EncodingError on the first line that doesn't decode.
    """
    for lineno, raw in enumerate(source, start=1):
        if isinstance(raw, bytes):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise EncodingError(lineno, e.reason) from e
        else:
            line = raw
        yield line.rstrip("\r\n")
