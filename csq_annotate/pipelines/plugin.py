"""
Host-facing lifecycle for the CSQ annotator.

The host drives four hooks in order: `init` once with the startup arguments,
`annotate_header` once with the current CSQ description, `process` once per
record, and `destroy` at teardown. All process-wide state lives on the plugin
instance; nothing is module-global.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from loguru import logger

from csq_annotate.annotation.rewriter import (
    DEFAULT_KEY_FIELD_INDEX,
    RewriteContext,
    RewriteStats,
    rewrite_composite_field,
)
from csq_annotate.annotation.schema import annotate_description, check_key_index, resolve_key_index
from csq_annotate.data.lookup import DEFAULT_TABLE_DELIMITER, LookupTable, build_lookup_table
from csq_annotate.errors import ConfigError

ABOUT = "Adds tags to the CSQ field in VEP-annotated VCFs"
USAGE = "Usage: csq-annotate [options] TAG_NAME TSV_FILE"


def about() -> str:
    return f"{ABOUT}\n{USAGE}\n"


class CsqAnnotatorPlugin:
    """
    Joins a key/value mapping table onto the transcripts of each CSQ field.

    Parameters
    ----------
    key_index:
        0-based sub-field position of the lookup key (VEP `Gene` by default).
    key_field:
        Optional sub-field name; when set, `annotate_header` resolves its
        position from the `Format: ...` description and overrides `key_index`.
    table_delimiter:
        Column separator of the mapping table.
    """

    def __init__(
        self,
        *,
        key_index: int = DEFAULT_KEY_FIELD_INDEX,
        key_field: str | None = None,
        table_delimiter: str = DEFAULT_TABLE_DELIMITER,
    ) -> None:
        if key_index < 0:
            raise ConfigError("key_index must be zero or greater")
        self.key_index = key_index
        self.key_field = key_field
        self.table_delimiter = table_delimiter
        self.tag_name: str | None = None
        self.table_path: Path | None = None
        self.table: LookupTable | None = None
        self.context: RewriteContext | None = None
        self.last_field: str | None = None

    @property
    def stats(self) -> RewriteStats:
        return self.context.stats if self.context is not None else RewriteStats()

    def init(self, argv: Sequence[str]) -> None:
        """
        Startup hook: `argv` is `[TAG_NAME, TSV_FILE, ...]`.

        Raises `ConfigError` with the usage text for missing arguments and lets
        `TableLoadError` from the table loader propagate.
        """
        if len(argv) < 2:
            raise ConfigError(about())
        tag_name, table_path = str(argv[0]), Path(argv[1])
        if not tag_name:
            raise ConfigError(f"TAG_NAME must not be empty\n{about()}")

        table = build_lookup_table(table_path, delimiter=self.table_delimiter)

        self.tag_name = tag_name
        self.table_path = table_path
        self.table = table
        self.context = RewriteContext(table=table, key_index=self.key_index)
        logger.info("Annotating transcripts with '{}' from {}", tag_name, table_path)

    def annotate_header(self, description: str) -> str:
        """Schema hook: append the new sub-field name to the CSQ description."""
        context = self._require_context()
        if self.key_field:
            context.key_index = resolve_key_index(description, self.key_field, context.key_index)
        check_key_index(description, context.key_index)
        return annotate_description(description, self.tag_name or "")

    def process(self, composite: str | None) -> str | None:
        """Per-record hook: records without a CSQ value pass through as None."""
        context = self._require_context()
        if composite is None:
            return None
        self.last_field = rewrite_composite_field(composite, context)
        return self.last_field

    def destroy(self) -> RewriteStats:
        """Teardown hook: drop the table and scratch buffers, return run counters."""
        stats = self.stats
        if self.context is not None:
            logger.info(
                "Processed {} records / {} transcripts; {} matched, {} with empty key, {} too short.",
                stats.records,
                stats.transcripts,
                stats.matched,
                stats.empty_keys,
                stats.short_transcripts,
            )
        self.table = None
        self.context = None
        self.last_field = None
        return stats

    def _require_context(self) -> RewriteContext:
        if self.context is None:
            raise RuntimeError("CsqAnnotatorPlugin.init() must run before records are processed.")
        return self.context
