"""
Per-record rewrite of the comma/pipe composite CSQ field.

Every transcript gains exactly one trailing pipe-delimited slot. The slot holds
the mapping value for the transcript's key sub-field when the key is found and
stays empty otherwise, so the output arity is fixed regardless of matches.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from csq_annotate.data.fields import FieldList, split_fields
from csq_annotate.data.lookup import LookupTable
from csq_annotate.errors import OutOfMemoryError

TRANSCRIPT_DELIMITER = ","
SUBFIELD_DELIMITER = "|"

# Position of `Gene` in VEP's `Allele|Consequence|IMPACT|SYMBOL|Gene|...` layout.
DEFAULT_KEY_FIELD_INDEX = 4


@dataclass
class RewriteStats:
    records: int = 0
    transcripts: int = 0
    matched: int = 0
    empty_keys: int = 0
    short_transcripts: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "records": self.records,
            "transcripts": self.transcripts,
            "matched": self.matched,
            "empty_keys": self.empty_keys,
            "short_transcripts": self.short_transcripts,
        }


@dataclass
class RewriteContext:
    """
    State shared by every per-record rewrite.

    The lookup table is read-only. The two field lists are scratch storage that
    is overwritten on each call, so a context must not be used by more than one
    rewrite at a time; parallel callers each need their own context over the
    same table.
    """

    table: LookupTable
    key_index: int = DEFAULT_KEY_FIELD_INDEX
    transcripts: FieldList[str] = field(default_factory=FieldList)
    subfields: FieldList[str] = field(default_factory=FieldList)
    stats: RewriteStats = field(default_factory=RewriteStats)

    def __post_init__(self) -> None:
        if self.key_index < 0:
            raise ValueError("key_index must be zero or greater")


def lookup_transcript_value(transcript: str, context: RewriteContext) -> str:
    """Return the mapping value for one transcript, or "" when there is none."""
    if not transcript:
        context.stats.empty_keys += 1
        return ""

    subfields = split_fields(transcript, SUBFIELD_DELIMITER, reuse=context.subfields)
    if context.key_index >= len(subfields):
        if not context.stats.short_transcripts:
            logger.warning(
                "Transcript has {} sub-fields; key index {} is out of range. "
                "Such transcripts get an empty slot.",
                len(subfields),
                context.key_index,
            )
        context.stats.short_transcripts += 1
        return ""

    key = subfields[context.key_index]
    if not key:
        context.stats.empty_keys += 1
        return ""

    value = context.table.get(key)
    if value is None:
        return ""
    context.stats.matched += 1
    return value


def rewrite_composite_field(composite: str, context: RewriteContext) -> str:
    """
    Append the looked-up value slot to every transcript of a composite field.

    Examples
    --------
    With `GENE1 -> ANNOT` in the table and `key_index=3`:

    >>> rewrite_composite_field("T1|x|y|GENE1|z,T2|a|b||c", ctx)  # doctest: +SKIP
    'T1|x|y|GENE1|z|ANNOT,T2|a|b||c|'
    """
    transcripts = split_fields(composite, TRANSCRIPT_DELIMITER, reuse=context.transcripts)
    parts: list[str] = []
    last = len(transcripts) - 1

    try:
        for idx, transcript in enumerate(transcripts):
            parts.append(transcript)
            parts.append(SUBFIELD_DELIMITER)
            parts.append(lookup_transcript_value(transcript, context))
            if idx < last:
                parts.append(TRANSCRIPT_DELIMITER)
        rewritten = "".join(parts)
    except MemoryError as exc:
        raise OutOfMemoryError("Out of memory while rebuilding the composite field") from exc

    context.stats.records += 1
    context.stats.transcripts += len(transcripts)
    return rewritten
