"""Entry point for annotating a VCF's CSQ transcripts from a mapping table."""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from csq_annotate.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
