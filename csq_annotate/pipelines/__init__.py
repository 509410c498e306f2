"""Plugin lifecycle and the streaming VCF host."""

from .annotate_vcf import annotate_lines, annotate_vcf, run_annotation  # noqa: F401
from .plugin import CsqAnnotatorPlugin, about  # noqa: F401
