"""
Delimiter splitting into reusable span lists.

A `FieldList` records `(offset, length)` spans over a caller-owned buffer
instead of materialising every token, and can be handed back to
`split_fields` so hot loops reuse the same span storage record after record.
"""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

AnyText = TypeVar("AnyText", str, bytes)

_INITIAL_CAPACITY = 8


class FieldList(Generic[AnyText]):
    """
    Ordered token spans over a single source buffer.

    Only the first `n` spans are live; slots past `n` are left over from
    earlier, longer inputs and are never exposed. `capacity` grows by doubling
    and never shrinks.
    """

    __slots__ = ("source", "spans", "n")

    def __init__(self, capacity: int = _INITIAL_CAPACITY) -> None:
        self.source: AnyText | None = None
        self.spans: list[tuple[int, int]] = [(0, 0)] * max(int(capacity), 1)
        self.n = 0

    @property
    def capacity(self) -> int:
        return len(self.spans)

    def _reserve(self, needed: int) -> None:
        capacity = len(self.spans)
        if needed <= capacity:
            return
        while capacity < needed:
            capacity *= 2
        self.spans.extend([(0, 0)] * (capacity - len(self.spans)))

    def __len__(self) -> int:
        return self.n

    def __getitem__(self, index: int) -> AnyText:
        if index < 0:
            index += self.n
        if not 0 <= index < self.n:
            raise IndexError(f"Field index {index} out of range for {self.n} fields")
        offset, length = self.spans[index]
        return self.source[offset : offset + length]  # type: ignore[index]

    def __iter__(self) -> Iterator[AnyText]:
        source = self.source
        for offset, length in self.spans[: self.n]:
            yield source[offset : offset + length]  # type: ignore[index]

    def span(self, index: int) -> tuple[int, int]:
        """Return the `(offset, length)` span of a live token."""
        if not 0 <= index < self.n:
            raise IndexError(f"Field index {index} out of range for {self.n} fields")
        return self.spans[index]

    def tokens(self) -> list[AnyText]:
        return list(self)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"FieldList(n={self.n}, capacity={self.capacity}, tokens={self.tokens()!r})"


def split_fields(
    text: AnyText,
    delimiter: AnyText,
    reuse: FieldList[AnyText] | None = None,
) -> FieldList[AnyText]:
    """
    Split `text` on a single-character delimiter into a `FieldList`.

    Empty tokens are kept, so the token count is always the delimiter count
    plus one: `"a,,b"` gives three spans and `""` gives one empty span.

    Parameters
    ----------
    text:
        Source buffer (`str` or `bytes`). The returned list keeps a reference
        to it; the list is only valid while the caller keeps `text` unchanged.
    delimiter:
        A single character (or single byte for `bytes` input).
    reuse:
        A list returned by an earlier call. Its spans are overwritten in place
        and its capacity grown when required.
    """
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")

    fields: FieldList[AnyText] = reuse if reuse is not None else FieldList()
    fields._reserve(text.count(delimiter) + 1)

    spans = fields.spans
    count = 0
    start = 0
    while True:
        stop = text.find(delimiter, start)
        if stop < 0:
            spans[count] = (start, len(text) - start)
            count += 1
            break
        spans[count] = (start, stop - start)
        count += 1
        start = stop + 1

    fields.source = text
    fields.n = count
    return fields
