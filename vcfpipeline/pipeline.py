# File: vcfpipeline/pipeline.py
# Location: vcfpipeline/vcfpipeline/pipeline.py

"""
Pipeline orchestration module.

- process_vcf runs the per-file stages for one input.
- process_all_vcfs runs process_vcf over every input VCF and counts outcomes.
- cleanup purges the scratch directory at the end of a run.

Only validation failures are absorbed per file. Failing external tools
raise ToolExecutionError, which ends the whole batch.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional

from .pipeline_core import PipelineContext, PipelineRunner, Workspace
from .pipeline_core.error_handling import VcfValidationError
from .stages import build_file_stages

logger = logging.getLogger("vcfpipeline")


class BatchResult(NamedTuple):
    """Outcome counters of one batch invocation."""

    processed: int
    failed: int


def run_file_pipeline(input_vcf, workspace: Workspace, cfg: Dict[str, Any]) -> PipelineContext:
    """
    Run every per-file stage and return the final context.

    Raises
    ------
    VcfValidationError
        If the input fails validation.
    ToolExecutionError
        If an external tool fails.
    """
    context = PipelineContext(input_vcf=Path(input_vcf), config=cfg, workspace=workspace)
    runner = PipelineRunner()
    context = runner.run(build_file_stages(), context)
    for stage_name, seconds in runner.get_execution_times().items():
        logger.debug(f"Stage timing for {context.base_name}: {stage_name} {seconds:.2f}s")
    return context


def process_vcf(
    input_vcf, workspace: Workspace, cfg: Dict[str, Any]
) -> Optional[PipelineContext]:
    """
    Process a single VCF from validation to statistics.

    Parameters
    ----------
    input_vcf : str or Path
        Input file.
    workspace : Workspace
        Run workspace.
    cfg : dict
        Run configuration.

    Returns
    -------
    PipelineContext or None
        Final context on success, None if the input failed validation.
    """
    logger.info(f"Processing VCF file: {os.path.basename(str(input_vcf))}")
    try:
        context = run_file_pipeline(input_vcf, workspace, cfg)
    except VcfValidationError:
        logger.error(f"Validation failed for {input_vcf}")
        return None

    logger.info(
        f"Successfully processed: {context.input_vcf.name} -> {context.final_vcf.name}"
    )
    return context


def process_all_vcfs(workspace: Workspace, cfg: Dict[str, Any]) -> BatchResult:
    """
    Process every `*.vcf` and `*.vcf.gz` file in the input directory.

    Parameters
    ----------
    workspace : Workspace
        Run workspace.
    cfg : dict
        Run configuration.

    Returns
    -------
    BatchResult
        Number of files processed successfully and number that failed validation.
    """
    logger.info("Starting batch processing of VCF files")

    processed_count = 0
    failed_count = 0
    for vcf_file in workspace.find_input_vcfs():
        if process_vcf(vcf_file, workspace, cfg) is not None:
            processed_count += 1
        else:
            failed_count += 1
            logger.error(f"Failed to process {vcf_file}")

    logger.info(
        f"Batch processing complete: {processed_count} successful, {failed_count} failed"
    )
    return BatchResult(processed_count, failed_count)


def cleanup(workspace: Workspace) -> None:
    """Remove the scratch directory of the run."""
    logger.info("Cleaning up temporary files")
    workspace.cleanup()
    logger.info("Cleanup complete")
