"""Command-line interface for annotating VEP CSQ fields from a mapping table."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Sequence

from loguru import logger

from csq_annotate.errors import AnnotationError
from csq_annotate.pipelines import about, run_annotation
from csq_annotate.utils import clone_config, load_config, set_by_dotted_path


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=about())
    parser.add_argument("tag_name", nargs="?", help="Name of the appended CSQ sub-field.")
    parser.add_argument("table_path", nargs="?", help="Tab-delimited key/value mapping file.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML configuration file; CLI flags override its values.",
    )
    parser.add_argument("-i", "--input", help="Input VCF (plain or .gz); '-' for stdin.")
    parser.add_argument("-o", "--output", help="Output VCF (plain or .gz); '-' for stdout.")
    parser.add_argument("--info-tag", help="INFO key holding the composite field (default: CSQ).")
    parser.add_argument("--key-index", type=int, help="0-based sub-field index of the lookup key.")
    parser.add_argument("--key-field", help="Sub-field name of the lookup key, resolved from the header.")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> dict[str, Any]:
    config = clone_config(load_config(args.config)) if args.config else {}
    overrides = {
        "annotation.tag_name": args.tag_name,
        "annotation.table_path": args.table_path,
        "annotation.info_tag": args.info_tag,
        "annotation.key_index": args.key_index,
        "annotation.key_field": args.key_field,
        "io.input": args.input,
        "io.output": args.output,
    }
    for dotted_key, value in overrides.items():
        if value is not None:
            set_by_dotted_path(config, dotted_key, value)
    return config


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
        stats = run_annotation(config)
    except (AnnotationError, OSError) as exc:
        logger.error("{}", exc)
        return 1
    logger.info("Done: {}", stats.as_dict())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
