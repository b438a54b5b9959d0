# File: vcfpipeline/annotator.py
# Location: vcfpipeline/vcfpipeline/annotator.py

"""
Annotation module.

Adds INFO field definitions to a VCF header with `bcftools annotate -h`
and, when an annotation source is configured, transfers the declared
columns from that source with `-a/-c`.

The file being annotated is never used as its own annotation source.
"""

import logging
from typing import Any, Dict, Optional

from .utils import index_vcf, run_command

logger = logging.getLogger("vcfpipeline")

DEFAULT_HEADER_LINE = (
    '##INFO=<ID=VARIANT_TYPE,Number=1,Type=String,'
    'Description="Type of variant (SNP, INDEL, etc.)">'
)
DEFAULT_ANNOTATION_COLUMNS = "INFO/VARIANT_TYPE"


def write_header_fragment(header_file: str, header_line: str = DEFAULT_HEADER_LINE) -> str:
    """Write a one-line VCF header fragment consumed by `bcftools annotate -h`."""
    with open(header_file, "w", encoding="utf-8") as f:
        f.write(header_line.rstrip("\n") + "\n")
    return str(header_file)


def annotate_variants(
    input_vcf: str,
    output_vcf: str,
    header_file: str,
    annotation_source: Optional[str] = None,
    cfg: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Annotate a VCF and write a bgzipped, indexed result.

    Parameters
    ----------
    input_vcf : str
        VCF to annotate.
    output_vcf : str
        Output path ('.vcf.gz').
    header_file : str
        Path where the header fragment is written before the call.
    annotation_source : str, optional
        Indexed VCF/tab file providing values for the annotation columns.
        Without it only the header definitions are added.
    cfg : dict, optional
        Configuration dictionary. Recognized keys:
            - "annotation_header_line": header line to inject
            - "annotation_columns": columns transferred from the source
            - "threads": passed to bcftools when set

    Returns
    -------
    str
        Path to the annotated VCF.
    """
    cfg = cfg or {}
    logger.info("Adding basic annotations")

    write_header_fragment(header_file, cfg.get("annotation_header_line") or DEFAULT_HEADER_LINE)

    cmd = ["bcftools", "annotate", "-h", str(header_file)]
    if annotation_source:
        columns = cfg.get("annotation_columns") or DEFAULT_ANNOTATION_COLUMNS
        logger.debug(f"Transferring {columns} from {annotation_source}")
        cmd.extend(["-a", str(annotation_source), "-c", columns])
    cmd.extend(["-O", "z", "-o", str(output_vcf)])
    if cfg.get("threads"):
        cmd.extend(["--threads", str(cfg["threads"])])
    cmd.append(str(input_vcf))
    run_command(cmd)

    index_vcf(str(output_vcf))
    logger.info("Variant annotation complete")
    return str(output_vcf)
