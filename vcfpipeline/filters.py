# File: vcfpipeline/filters.py
# Location: vcfpipeline/vcfpipeline/filters.py

"""
Filtering module.

This module applies per-record quality thresholds to a VCF with
`bcftools filter`, writes a bgzipped result and indexes it with tabix.
"""

import logging
from typing import Any, Dict, NamedTuple, Optional

from .utils import count_variant_records, index_vcf, run_command

logger = logging.getLogger("vcfpipeline")

DEFAULT_MIN_QUAL = 30
DEFAULT_MIN_DEPTH = 10


class FilterResult(NamedTuple):
    """Record counts on both sides of the quality filter."""

    output_file: str
    input_count: int
    output_count: int


def build_quality_expression(min_qual, min_depth) -> str:
    """Return the bcftools inclusion expression for QUAL and INFO/DP thresholds."""
    return f"QUAL >= {min_qual} && INFO/DP >= {min_depth}"


def quality_filter(
    input_vcf: str,
    output_vcf: str,
    min_qual=DEFAULT_MIN_QUAL,
    min_depth=DEFAULT_MIN_DEPTH,
    cfg: Optional[Dict[str, Any]] = None,
) -> FilterResult:
    """
    Keep only records passing the quality and read-depth thresholds.

    Parameters
    ----------
    input_vcf : str
        Path to the input VCF (plain or compressed).
    output_vcf : str
        Path of the bgzipped output VCF ('.vcf.gz'); indexed afterwards.
    min_qual : int or float
        Minimum QUAL value (inclusive).
    min_depth : int
        Minimum INFO/DP value (inclusive).
    cfg : dict, optional
        Configuration dictionary. Recognized keys:
            - "threads": Number of threads passed to bcftools (default = 1).

    Returns
    -------
    FilterResult
        Output path and the record counts before and after filtering.

    Raises
    ------
    ToolExecutionError
        If bcftools or tabix exits with a non-zero status.
    """
    cfg = cfg or {}
    input_vcf = str(input_vcf)
    output_vcf = str(output_vcf)
    logger.info(f"Applying quality filters (QUAL >= {min_qual}, DP >= {min_depth})")

    cmd = [
        "bcftools", "filter",
        "-i", build_quality_expression(min_qual, min_depth),
        "-O", "z",
        "-o", output_vcf,
    ]
    threads = cfg.get("threads")
    if threads:
        cmd.extend(["--threads", str(threads)])
    cmd.append(input_vcf)
    run_command(cmd)

    index_vcf(output_vcf)

    original_count = count_variant_records(input_vcf)
    filtered_count = count_variant_records(output_vcf)
    logger.info(f"Quality filtering complete: {original_count} -> {filtered_count} variants")
    return FilterResult(output_vcf, original_count, filtered_count)
