"""
Minimal VCF text accessors used by the streaming annotation host.

Only the pieces the annotator touches are modelled: the INFO column of data
lines and the quoted `Description` of `##INFO` header lines. Everything else
is passed through untouched.
"""

from __future__ import annotations

import re

INFO_COLUMN = 7
MISSING_VALUE = "."
INFO_HEADER_PREFIX = "##INFO=<"
HEADER_PREFIX = "#"

_DESCRIPTION_RE = re.compile(r'Description=("(?:[^"\\]|\\.)*")')


def is_info_header(line: str, tag: str) -> bool:
    """Return True for the `##INFO=<ID=<tag>,...>` header line."""
    if not line.startswith(INFO_HEADER_PREFIX):
        return False
    body = line[len(INFO_HEADER_PREFIX) :]
    return body.startswith(f"ID={tag},") or body.startswith(f"ID={tag}>")


def find_header_description(line: str) -> str | None:
    """Return the quoted Description value (quotes included) of a header line."""
    match = _DESCRIPTION_RE.search(line)
    return match.group(1) if match else None


def replace_header_description(line: str, description: str) -> str:
    """Swap the quoted Description value of a header line for `description`."""
    match = _DESCRIPTION_RE.search(line)
    if match is None:
        return line
    start, end = match.span(1)
    return line[:start] + description + line[end:]


def parse_info(info: str) -> list[tuple[str, str | None]]:
    """Split an INFO column into ordered `(key, value)` pairs; flags map to None."""
    if not info or info == MISSING_VALUE:
        return []
    pairs: list[tuple[str, str | None]] = []
    for item in info.split(";"):
        if not item:
            continue
        key, sep, value = item.partition("=")
        pairs.append((key, value if sep else None))
    return pairs


def format_info(pairs: list[tuple[str, str | None]]) -> str:
    if not pairs:
        return MISSING_VALUE
    return ";".join(key if value is None else f"{key}={value}" for key, value in pairs)


def get_info_value(info: str, key: str) -> str | None:
    """Return the value stored under `key`, or None when absent or a flag."""
    for name, value in parse_info(info):
        if name == key:
            return value
    return None


def set_info_value(info: str, key: str, value: str) -> str:
    """Replace (or append) `key=value` while keeping other entries in order."""
    pairs = parse_info(info)
    for idx, (name, _) in enumerate(pairs):
        if name == key:
            pairs[idx] = (key, value)
            break
    else:
        pairs.append((key, value))
    return format_info(pairs)


def split_record(line: str) -> tuple[list[str], str]:
    """Split a data line into columns and its original line terminator."""
    body = line.rstrip("\r\n")
    return body.split("\t"), line[len(body) :]
