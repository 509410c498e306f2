"""Composite-field rewriting and schema description updates."""

from .rewriter import (  # noqa: F401
    DEFAULT_KEY_FIELD_INDEX,
    RewriteContext,
    RewriteStats,
    rewrite_composite_field,
)
from .schema import (  # noqa: F401
    annotate_description,
    check_key_index,
    format_fields,
    resolve_key_index,
)
