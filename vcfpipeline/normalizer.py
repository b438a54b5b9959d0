# File: vcfpipeline/normalizer.py
# Location: vcfpipeline/vcfpipeline/normalizer.py

"""
Normalization module.

Splits multi-allelic records into biallelic ones and left-aligns indels
against a reference FASTA with `bcftools norm`.
"""

import logging
import os
from typing import Any, Dict, Optional

from .utils import index_vcf, run_command

logger = logging.getLogger("vcfpipeline")


def normalize_variants(
    input_vcf: str,
    output_vcf: str,
    reference_fasta: str,
    cfg: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Normalize a VCF against a reference genome, then bgzip and index it.

    Parameters
    ----------
    input_vcf : str
        Path to the filtered, bgzipped VCF.
    output_vcf : str
        Path of the normalized output ('.vcf.gz').
    reference_fasta : str
        Reference sequence the records are checked and left-aligned against.
    cfg : dict, optional
        Configuration dictionary; "threads" is passed to bcftools when set.

    Returns
    -------
    str
        Path to the normalized VCF.
    """
    cfg = cfg or {}
    logger.info(f"Normalizing variants with reference: {os.path.basename(str(reference_fasta))}")

    cmd = [
        "bcftools", "norm",
        "-f", str(reference_fasta),
        "-m", "-both",
        "-O", "z",
        "-o", str(output_vcf),
    ]
    if cfg.get("threads"):
        cmd.extend(["--threads", str(cfg["threads"])])
    cmd.append(str(input_vcf))
    run_command(cmd)

    index_vcf(str(output_vcf))
    logger.info("Variant normalization complete")
    return str(output_vcf)
