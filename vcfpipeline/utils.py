# File: vcfpipeline/utils.py
# Location: vcfpipeline/vcfpipeline/utils.py

"""
Utility functions module.

Provides helper functions for running external commands, checking tool
availability, retrieving tool versions and gzip-aware file handling.
"""

import gzip
import logging
import shutil
import subprocess
from typing import List, NamedTuple, Optional

from .pipeline_core.error_handling import ToolExecutionError

logger = logging.getLogger("vcfpipeline")


class CommandResult(NamedTuple):
    """Outcome of an external command invocation."""

    returncode: int
    stdout: str
    stderr: str


def check_external_tools(tools: List[str]) -> List[str]:
    """
    Check which external tools are missing from PATH.

    Parameters
    ----------
    tools : List[str]
        List of tool names to check for availability

    Returns
    -------
    List[str]
        Names of the tools that could not be resolved, in the order given.
        An empty list means every tool was found.
    """
    missing = []
    for tool in tools:
        if not shutil.which(tool):
            logger.error(f"{tool} is not installed or not in PATH")
            missing.append(tool)
        else:
            logger.debug(f"Found tool in PATH: {tool}")
    return missing


def smart_open(filename: str, mode: str = "r", encoding: str = "utf-8"):
    """
    Open a file with automatic gzip support based on file extension.

    Parameters
    ----------
    filename : str
        Path to the file
    mode : str
        File opening mode ('r', 'w', 'rt', 'wt', etc.)
    encoding : str
        Text encoding (for text modes)

    Returns
    -------
    file object
        Opened file handle
    """
    filename = str(filename)
    if filename.endswith(".gz"):
        if "b" in mode:
            return gzip.open(filename, mode)
        # Ensure text mode for gzip
        if "t" not in mode:
            mode = mode + "t"
        return gzip.open(filename, mode, encoding=encoding)
    else:
        if "b" not in mode:
            return open(filename, mode, encoding=encoding)
        else:
            return open(filename, mode)


def run_command(
    cmd: List[str], output_file: Optional[str] = None, check: bool = True
) -> CommandResult:
    """
    Run an external command given as an argument list (never through a shell).

    Parameters
    ----------
    cmd : list of str
        Command and its arguments.
    output_file : str, optional
        Path to a file where stdout should be written. The captured stdout
        of the result is empty in that case.
    check : bool
        Raise ToolExecutionError on a non-zero exit code (default True).

    Returns
    -------
    CommandResult
        Exit status with captured stdout and stderr.

    Raises
    ------
    ToolExecutionError
        If check is set and the command returns a non-zero exit code.
    """
    cmd = [str(c) for c in cmd]
    logger.debug("Running command: %s", " ".join(cmd))
    if output_file:
        with open(output_file, "w", encoding="utf-8") as out_f:
            proc = subprocess.run(cmd, stdout=out_f, stderr=subprocess.PIPE, text=True)
        result = CommandResult(proc.returncode, "", proc.stderr or "")
    else:
        proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
        result = CommandResult(proc.returncode, proc.stdout or "", proc.stderr or "")

    if result.returncode != 0:
        if check:
            logger.error("Command failed: %s\nError: %s", " ".join(cmd), result.stderr)
            raise ToolExecutionError(cmd, result.returncode, result.stderr)
        logger.debug("Command exited with status %d: %s", result.returncode, " ".join(cmd))
    else:
        logger.debug("Command completed successfully.")
    return result


def index_vcf(vcf_file: str) -> str:
    """Build a tabix positional index next to a bgzipped VCF and return its path."""
    run_command(["tabix", "-p", "vcf", vcf_file])
    return f"{vcf_file}.tbi"


def count_variant_records(vcf_file: str) -> int:
    """
    Count the non-header records of a VCF file.

    Parameters
    ----------
    vcf_file : str
        Path to a plain or gzip/bgzip compressed VCF.

    Returns
    -------
    int
        Number of lines not starting with '#'. Lines are read as bytes, so
        records in any encoding are counted.
    """
    count = 0
    with smart_open(vcf_file, "rb") as f:
        for line in f:
            if not line.startswith(b"#"):
                count += 1
    return count


def get_tool_version(tool_name: str) -> str:
    """
    Retrieve the version of a given tool.

    Supported tools:

    - bcftools
    - tabix
    - bgzip

    Parameters
    ----------
    tool_name : str
        Name of the tool to retrieve version for.

    Returns
    -------
    str
        Version string or 'N/A' if not found or cannot be retrieved.
    """

    def parse_first_matching(keyword):
        def parse(stdout, stderr):
            for line in stdout.splitlines() + stderr.splitlines():
                if keyword in line.lower():
                    return line.strip()
            return "N/A"

        return parse

    tool_map = {
        "bcftools": {
            "command": ["bcftools", "--version"],
            "parse_func": parse_first_matching("bcftools"),
        },
        "tabix": {"command": ["tabix", "--version"], "parse_func": parse_first_matching("tabix")},
        "bgzip": {"command": ["bgzip", "--version"], "parse_func": parse_first_matching("bgzip")},
    }

    if tool_name not in tool_map:
        logger.warning("No version retrieval logic for %s. Returning 'N/A'.", tool_name)
        return "N/A"

    cmd = tool_map[tool_name]["command"]
    parse_func = tool_map[tool_name]["parse_func"]

    try:
        result = subprocess.run(
            cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, check=False
        )
        version = parse_func(result.stdout, result.stderr)
        if version == "N/A":
            logger.warning("Could not parse version for %s. Returning 'N/A'.", tool_name)
        return version
    except OSError as e:
        logger.warning("Failed to retrieve version for %s: %s", tool_name, e)
        return "N/A"


def remove_vcf_extensions(filename: str) -> str:
    """
    Remove common VCF-related extensions from a filename.

    Parameters
    ----------
    filename : str
        The input filename, possibly ending in .vcf, .vcf.gz, or .gz.

    Returns
    -------
    str
        The filename base without VCF-related extensions.
    """
    if filename.endswith(".vcf.gz"):
        return filename[:-7]
    elif filename.endswith(".vcf"):
        return filename[:-4]
    elif filename.endswith(".gz"):
        return filename[:-3]
    return filename
