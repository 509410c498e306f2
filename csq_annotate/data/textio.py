"""Text stream helpers shared by the table loader and the VCF host."""

from __future__ import annotations

import gzip
import sys
from pathlib import Path
from typing import IO

STDIO_PATH = "-"
# Undecodable bytes become lone surrogates on read and the same bytes on write.
DECODE_ERRORS = "surrogateescape"


def open_text(path: str | Path, mode: str = "r", *, encoding: str = "utf-8") -> IO[str]:
    """
    Open a plain or gzip-compressed text file.

    Bytes that are not valid in `encoding` are carried through unchanged
    (`surrogateescape`), so a stray byte in one line never aborts a read.
    `-` maps to stdin/stdout; those streams are wrapped so closing the
    returned handle leaves the process streams open.
    """
    if mode not in {"r", "w"}:
        raise ValueError("mode must be either 'r' or 'w'")

    if str(path) == STDIO_PATH:
        stream = sys.stdin if mode == "r" else sys.stdout
        return open(
            stream.fileno(), mode, encoding=encoding, errors=DECODE_ERRORS, newline="", closefd=False
        )

    target = Path(path)
    if target.suffix == ".gz":
        return gzip.open(target, mode + "t", encoding=encoding, errors=DECODE_ERRORS, newline="")
    return target.open(mode, encoding=encoding, errors=DECODE_ERRORS, newline="")
