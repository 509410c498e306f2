"""Field splitting, mapping-table loading, and VCF text primitives."""

from .fields import FieldList, split_fields  # noqa: F401
from .lookup import (  # noqa: F401
    KeyValueEntry,
    LookupTable,
    build_lookup_table,
    parse_table_lines,
    sort_entries,
)
from .textio import open_text  # noqa: F401
