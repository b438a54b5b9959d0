# File: vcfpipeline/stats.py
# Location: vcfpipeline/vcfpipeline/stats.py

"""
Statistics module for vcfpipeline.

Runs `bcftools stats` on a final VCF and parses the summary-number (SN)
section of its report. Counts that are missing or malformed in the report
are returned as None instead of being guessed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .utils import run_command

logger = logging.getLogger("vcfpipeline")

SN_RECORDS = "number of records"
SN_SNPS = "number of SNPs"
SN_INDELS = "number of indels"


@dataclass
class VcfStatsSummary:
    """Parsed SN section of a bcftools stats report.

    Attributes
    ----------
    records : int or None
        "number of records", None if absent or not an integer
    snps : int or None
        "number of SNPs"
    indels : int or None
        "number of indels"
    summary : dict
        Every SN key (without trailing colon) mapped to its raw value
    sn_lines : list of str
        Raw SN lines in report order
    """

    records: Optional[int] = None
    snps: Optional[int] = None
    indels: Optional[int] = None
    summary: Dict[str, str] = field(default_factory=dict)
    sn_lines: List[str] = field(default_factory=list)


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.debug(f"Non-integer value in stats report: {value!r}")
        return None


def parse_bcftools_stats(lines) -> VcfStatsSummary:
    """
    Parse the SN lines of a bcftools stats report.

    SN lines are tab separated: ``SN <id> <key>: <value>``.

    Parameters
    ----------
    lines : iterable of str
        Report lines, e.g. an open file handle.

    Returns
    -------
    VcfStatsSummary
        Parsed counts; absent keys stay None.
    """
    parsed = VcfStatsSummary()
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.startswith("SN\t"):
            continue
        parsed.sn_lines.append(line)
        parts = line.split("\t")
        if len(parts) < 4:
            continue
        key = parts[2].strip().rstrip(":")
        parsed.summary.setdefault(key, parts[3].strip())

    parsed.records = _to_int(parsed.summary.get(SN_RECORDS))
    parsed.snps = _to_int(parsed.summary.get(SN_SNPS))
    parsed.indels = _to_int(parsed.summary.get(SN_INDELS))
    return parsed


def read_stats_file(stats_file: str) -> VcfStatsSummary:
    """Parse a bcftools stats report stored on disk."""
    with open(stats_file, "r", encoding="utf-8") as f:
        return parse_bcftools_stats(f)


def format_count(value: Optional[int]) -> str:
    """Render an optional count for log and report lines."""
    return "not found" if value is None else str(value)


def generate_stats(
    vcf_file: str, stats_file: str, cfg: Optional[Dict[str, Any]] = None
) -> VcfStatsSummary:
    """
    Write `bcftools stats` output for a VCF to a file and log the key counts.

    Parameters
    ----------
    vcf_file : str
        Final, bgzipped VCF.
    stats_file : str
        Destination of the raw report.
    cfg : dict, optional
        Configuration dictionary; "threads" is passed to bcftools when set.

    Returns
    -------
    VcfStatsSummary
        Parsed SN section of the written report.
    """
    cfg = cfg or {}
    logger.info("Generating summary statistics")

    cmd = ["bcftools", "stats"]
    if cfg.get("threads"):
        cmd.extend(["--threads", str(cfg["threads"])])
    cmd.append(str(vcf_file))
    run_command(cmd, output_file=str(stats_file))

    summary = read_stats_file(str(stats_file))
    logger.info(
        f"Statistics generated - Total: {format_count(summary.records)}, "
        f"SNPs: {format_count(summary.snps)}, INDELs: {format_count(summary.indels)}"
    )
    return summary
