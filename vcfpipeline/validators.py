# File: vcfpipeline/validators.py
# Location: vcfpipeline/vcfpipeline/validators.py

"""
Validation module for vcfpipeline.

This module provides functions to validate:
- Input VCF files (existence, bgzip stream integrity, format header)
- The run environment (write permission, required external tools)

Per-file validation returns a boolean so the batch orchestrator can count
failures and move on; environment problems raise and end the run.
"""

import logging
import os
import zlib
from typing import List, Optional

from .pipeline_core.error_handling import ConfigurationError, ToolNotFoundError
from .utils import check_external_tools, run_command, smart_open

logger = logging.getLogger("vcfpipeline")

VCF_HEADER_PREFIX = "##fileformat=VCF"


def read_first_line(vcf_path: str) -> Optional[str]:
    """
    Return the first line of a plain or gzip compressed file, or None if unreadable.

    Parameters
    ----------
    vcf_path : str
        Path to the file.

    Returns
    -------
    str or None
        First line without its trailing newline, '' for an empty file,
        None if the gzip stream cannot be read. Only this line is decoded,
        with undecodable bytes replaced.
    """
    try:
        with smart_open(vcf_path, "rb") as f:
            first = f.readline()
    except (OSError, EOFError, zlib.error) as e:
        logger.debug(f"Could not read first line of {vcf_path}: {e}")
        return None
    return first.decode("utf-8", errors="replace").rstrip("\r\n")


def validate_vcf_file(vcf_path: Optional[str], logger: logging.Logger = logger) -> bool:
    """
    Validate that an input VCF exists, is intact and carries a VCF header.

    Parameters
    ----------
    vcf_path : str or None
        Path to the VCF file to validate.
    logger : logging.Logger
        Logger receiving one line per check outcome.

    Returns
    -------
    bool
        True if every check passed.
    """
    name = os.path.basename(str(vcf_path)) if vcf_path else str(vcf_path)
    logger.info(f"Validating VCF file: {name}")

    if not vcf_path or not os.path.isfile(vcf_path):
        logger.error(f"VCF file not found: {vcf_path}")
        return False

    vcf_path = str(vcf_path)
    if vcf_path.endswith(".gz"):
        result = run_command(["bgzip", "-t", vcf_path], check=False)
        if result.returncode != 0:
            logger.error(f"Invalid compressed VCF file: {vcf_path}")
            return False

    header_line = read_first_line(vcf_path)
    if header_line is None or not header_line.startswith(VCF_HEADER_PREFIX):
        logger.error(f"Invalid VCF header in file: {vcf_path}")
        return False

    logger.info(f"VCF validation passed: {name}")
    return True


def check_dependencies(tools: List[str]) -> None:
    """
    Verify that every required external executable is resolvable.

    Parameters
    ----------
    tools : List[str]
        Executable names, e.g. ["bcftools", "tabix", "bgzip"].

    Raises
    ------
    ToolNotFoundError
        For the first tool that is missing from PATH.
    """
    logger.info("Checking dependencies...")
    missing = check_external_tools(tools)
    if missing:
        raise ToolNotFoundError(missing[0])
    logger.info("All dependencies found")


def validate_write_permission(directory: str) -> None:
    """
    Ensure the run root accepts new files.

    Raises
    ------
    ConfigurationError
        If the directory is missing or not writable.
    """
    if not os.path.isdir(directory) or not os.access(directory, os.W_OK):
        raise ConfigurationError(f"No write permission in script directory: {directory}")
