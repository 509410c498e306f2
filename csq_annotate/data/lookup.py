"""
Sorted key/value lookup tables loaded from delimited mapping files.

The table is built once at startup and then queried once per transcript, so
loading pays a single O(n log n) sort and every lookup is a binary search over
a numpy array of keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

import numpy as np
from loguru import logger

from csq_annotate.errors import TableLoadError

from .fields import FieldList, split_fields
from .textio import open_text

DEFAULT_TABLE_DELIMITER = "\t"


@dataclass(frozen=True)
class KeyValueEntry:
    """One mapping-file row: a non-empty lookup key and the value to append."""

    key: str
    value: str


@dataclass(frozen=True, eq=False)
class LookupTable:
    """
    Read-only table of entries ordered by key.

    Keys compare by code point, which is the same order as comparing their
    UTF-8 bytes. When a key occurs more than once, lookups return the first
    occurrence in file order.

    `keys` is a fixed-width numpy unicode array: every slot is as wide as the
    longest key (4 bytes per character), so one oversized key inflates the
    whole array. The width is logged when the table is loaded.
    """

    keys: np.ndarray
    values: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.values)

    @property
    def key_width(self) -> int:
        return int(self.keys.dtype.itemsize // 4)

    def __iter__(self) -> Iterator[KeyValueEntry]:
        for key, value in zip(self.keys.tolist(), self.values):
            yield KeyValueEntry(key=key, value=value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._position(key) is not None

    def _position(self, key: str) -> int | None:
        if not key or not len(self.values):
            return None
        idx = int(np.searchsorted(self.keys, key, side="left"))
        if idx < len(self.values) and self.keys[idx] == key:
            return idx
        return None

    def find(self, key: str) -> KeyValueEntry | None:
        """Binary-search for an exact key match."""
        idx = self._position(key)
        if idx is None:
            return None
        return KeyValueEntry(key=key, value=self.values[idx])

    def get(self, key: str, default: str | None = None) -> str | None:
        idx = self._position(key)
        return default if idx is None else self.values[idx]


def sort_entries(entries: Iterable[KeyValueEntry]) -> LookupTable:
    """Order entries by key with a stable sort and pack them into a table."""
    items = list(entries)
    if not items:
        return LookupTable(keys=np.array([], dtype=str), values=())

    keys = np.array([entry.key for entry in items], dtype=str)
    order = np.argsort(keys, kind="stable")
    return LookupTable(
        keys=keys[order],
        values=tuple(items[int(idx)].value for idx in order),
    )


def parse_table_lines(
    lines: Iterable[str],
    *,
    delimiter: str = DEFAULT_TABLE_DELIMITER,
) -> tuple[list[KeyValueEntry], int]:
    """
    Tokenise mapping lines into entries.

    Adjacent delimiters collapse, so the first two non-empty tokens of a line
    are its key and value; further columns are ignored. Returns the entries in
    file order and the number of skipped lines.
    """
    entries: list[KeyValueEntry] = []
    skipped = 0
    columns: FieldList[str] = FieldList()

    for raw in lines:
        line = raw.rstrip("\r\n")
        split_fields(line, delimiter, reuse=columns)
        tokens = [token for token in columns if token]
        if len(tokens) < 2:
            skipped += 1
            continue
        entries.append(KeyValueEntry(key=tokens[0], value=tokens[1]))

    return entries, skipped


def build_lookup_table(
    source: str | Path | Iterable[str],
    *,
    delimiter: str = DEFAULT_TABLE_DELIMITER,
) -> LookupTable:
    """
    Load a two-column mapping file into a sorted `LookupTable`.

    Parameters
    ----------
    source:
        Path to a plain or `.gz` text file, or an iterable of lines.
    delimiter:
        Column separator (tab by default).

    Raises
    ------
    TableLoadError
        If the file cannot be read or contains no usable rows.
    """
    if isinstance(source, (str, Path)):
        label = str(source)
        try:
            with open_text(source) as handle:
                entries, skipped = parse_table_lines(handle, delimiter=delimiter)
        except OSError as exc:
            raise TableLoadError(label, str(exc)) from exc
    else:
        label = "<lines>"
        entries, skipped = parse_table_lines(source, delimiter=delimiter)

    if not entries:
        raise TableLoadError(label, "no usable rows")

    if skipped:
        logger.debug("Skipped {} mapping lines with fewer than two columns in {}.", skipped, label)

    table = sort_entries(entries)
    logger.info(
        "Loaded {} mapping entries from {} (longest key: {} characters)",
        len(table),
        label,
        table.key_width,
    )
    return table
