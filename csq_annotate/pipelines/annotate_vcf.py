"""
Streaming VCF host for the CSQ annotator.

Reads a plain or bgzip/gzip VCF line by line, patches the CSQ header
description once, rewrites the CSQ INFO value of each record, and writes the
result without buffering the whole file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from loguru import logger

from csq_annotate.annotation.rewriter import RewriteStats
from csq_annotate.data.textio import open_text
from csq_annotate.data.vcf import (
    HEADER_PREFIX,
    INFO_COLUMN,
    find_header_description,
    get_info_value,
    is_info_header,
    replace_header_description,
    set_info_value,
    split_record,
)
from csq_annotate.utils.config import AnnotationSettings

from .plugin import CsqAnnotatorPlugin


def annotate_lines(
    lines: Iterable[str],
    plugin: CsqAnnotatorPlugin,
    *,
    info_tag: str = "CSQ",
) -> Iterator[str]:
    """Yield annotated VCF lines for an already-initialised plugin."""
    header_patched = False

    for line in lines:
        if line.startswith(HEADER_PREFIX):
            if not header_patched and is_info_header(line, info_tag):
                description = find_header_description(line)
                if description is not None:
                    line = replace_header_description(line, plugin.annotate_header(description))
                    header_patched = True
            elif line.startswith("#CHROM") and not header_patched:
                logger.warning("No ##INFO header with a Description found for {}.", info_tag)
            yield line
            continue

        columns, terminator = split_record(line)
        if len(columns) <= INFO_COLUMN:
            yield line
            continue

        composite = get_info_value(columns[INFO_COLUMN], info_tag)
        rewritten = plugin.process(composite)
        if rewritten is None:
            yield line
            continue

        columns[INFO_COLUMN] = set_info_value(columns[INFO_COLUMN], info_tag, rewritten)
        yield "\t".join(columns) + terminator


def annotate_vcf(
    input_path: str | Path,
    output_path: str | Path,
    plugin: CsqAnnotatorPlugin,
    *,
    info_tag: str = "CSQ",
) -> RewriteStats:
    """Annotate `input_path` into `output_path` (`-` for stdin/stdout)."""
    with open_text(input_path) as source, open_text(output_path, "w") as sink:
        sink.writelines(annotate_lines(source, plugin, info_tag=info_tag))
    return plugin.stats


def run_annotation(config: Mapping[str, Any]) -> RewriteStats:
    """
    Run the full plugin lifecycle described by a config mapping.

    `destroy` always runs, so the plugin state is released even when a record
    or the output stream fails midway.
    """
    settings = AnnotationSettings.from_config(config)
    plugin = CsqAnnotatorPlugin(
        key_index=settings.key_index,
        key_field=settings.key_field,
        table_delimiter=settings.table_delimiter,
    )
    plugin.init([settings.tag_name, str(settings.table_path)])
    try:
        logger.info("Annotating {} -> {}", settings.input_path, settings.output_path)
        annotate_vcf(settings.input_path, settings.output_path, plugin, info_tag=settings.info_tag)
    finally:
        stats = plugin.destroy()
    return stats
