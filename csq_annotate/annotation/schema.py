"""Schema description helpers for the composite field header."""

from __future__ import annotations

from loguru import logger

from csq_annotate.errors import OutOfMemoryError

FORMAT_MARKER = "Format: "
SUBFIELD_DELIMITER = "|"
QUOTE = '"'


def annotate_description(description: str, new_field_name: str) -> str:
    """
    Declare `new_field_name` as the last sub-field of a `Format: ...` description.

    The closing quote, when present, is kept at the end:
    `'"... Format: A|B|C"'` becomes `'"... Format: A|B|C|D"'`. Descriptions
    without the marker are returned unchanged.
    """
    if FORMAT_MARKER not in description:
        return description

    quoted = description.endswith(QUOTE)
    body = description[:-1] if quoted else description
    try:
        return "".join((body, SUBFIELD_DELIMITER, new_field_name, QUOTE if quoted else ""))
    except MemoryError as exc:
        raise OutOfMemoryError("Out of memory while extending the schema description") from exc


def format_fields(description: str) -> list[str] | None:
    """Return the sub-field names declared after `Format: `, if any."""
    start = description.find(FORMAT_MARKER)
    if start < 0:
        return None
    declared = description[start + len(FORMAT_MARKER) :]
    if declared.endswith(QUOTE):
        declared = declared[:-1]
    return declared.split(SUBFIELD_DELIMITER)


def resolve_key_index(description: str | None, key_field: str | None, default: int) -> int:
    """
    Find the position of `key_field` in the declared format.

    Falls back to `default` (with a warning) when no name is given, the
    description lacks a format, or the name is not declared.
    """
    if not key_field:
        return default
    fields = format_fields(description) if description else None
    if fields is None:
        logger.warning(
            "Cannot resolve key field '{}' without a Format description; using index {}.",
            key_field,
            default,
        )
        return default
    try:
        return fields.index(key_field)
    except ValueError:
        logger.warning(
            "Key field '{}' not declared in Format ({}); using index {}.",
            key_field,
            SUBFIELD_DELIMITER.join(fields),
            default,
        )
        return default


def check_key_index(description: str | None, key_index: int) -> bool:
    """Warn when the declared format is too short to hold the key sub-field."""
    fields = format_fields(description) if description else None
    if fields is None:
        return True
    if key_index >= len(fields):
        logger.warning(
            "Format declares {} sub-fields but the key index is {}; no transcript will match.",
            len(fields),
            key_index,
        )
        return False
    logger.info("Using sub-field '{}' (index {}) as the lookup key.", fields[key_index], key_index)
    return True
