"""
Workspace - Centralized file path management for pipeline runs.

This module provides the Workspace class that owns the run-root directory
layout and the naming convention of every artifact the pipeline produces.
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class Workspace:
    """Manages all file paths for a pipeline run.

    Artifact names are a deterministic function of the input base name
    (file name with .vcf/.vcf.gz stripped) plus a stage suffix. Two inputs
    that share a base name map onto the same artifacts.

    Attributes
    ----------
    root_dir : Path
        Run root holding inputs, outputs, scratch space and the log
    input_dir : Path
        Directory scanned for input VCFs in batch mode
    output_dir : Path
        Directory for final artifacts, stats files and the report
    temp_dir : Path
        Scratch directory for intermediate artifacts
    log_file : Path
        Append-only processing log
    reference_fasta : Path
        Optional reference genome; its presence gates normalization
    """

    def __init__(self, root_dir: Path, cfg: Optional[Dict[str, Any]] = None):
        """Initialize workspace paths from a run root and configuration.

        Parameters
        ----------
        root_dir : Path
            Run root directory
        cfg : dict, optional
            Configuration providing directory and file names
        """
        cfg = cfg or {}
        self.root_dir = Path(root_dir).resolve()
        self.input_dir = self.root_dir / cfg.get("input_dir", "input_vcf")
        self.output_dir = self.root_dir / cfg.get("output_dir", "processed_vcf")
        self.temp_dir = self.root_dir / cfg.get("temp_dir", "temp")
        self.log_file = self.root_dir / cfg.get("log_file", "processing.log")

        reference = cfg.get("reference_fasta") or "reference.fa"
        self.reference_fasta = self.root_dir / reference

        self.report_file = self.output_dir / cfg.get("report_file", "processing_report.txt")
        self.summary_file = self.output_dir / cfg.get("summary_file", "processing_summary.tsv")

    def create_directories(self) -> None:
        """Create the output and scratch directories if they do not exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Workspace initialized: output_dir={self.output_dir}")
        logger.debug(f"Temporary directory: {self.temp_dir}")

    def has_reference(self) -> bool:
        """Check for the reference genome; evaluated on every call, never cached."""
        return self.reference_fasta.is_file()

    @staticmethod
    def base_name_for(vcf_path) -> str:
        """Return the artifact base name of an input VCF path."""
        from ..utils import remove_vcf_extensions

        return remove_vcf_extensions(Path(vcf_path).name)

    def get_intermediate_path(self, base_name: str, stage: str) -> Path:
        """Return `<temp>/<base>_<stage>.vcf.gz`."""
        return self.temp_dir / f"{base_name}_{stage}.vcf.gz"

    def get_temp_path(self, name: str) -> Path:
        """Return a path inside the scratch directory."""
        return self.temp_dir / name

    def get_final_path(self, base_name: str) -> Path:
        """Return `<output>/<base>_processed.vcf.gz`."""
        return self.output_dir / f"{base_name}_processed.vcf.gz"

    def get_stats_path(self, base_name: str) -> Path:
        """Return `<output>/<base>_stats.txt`."""
        return self.output_dir / f"{base_name}_stats.txt"

    def find_input_vcfs(self) -> List[Path]:
        """List input files: every `*.vcf`, then every `*.vcf.gz`, each sorted."""
        candidates = sorted(self.input_dir.glob("*.vcf")) + sorted(self.input_dir.glob("*.vcf.gz"))
        return [path for path in candidates if path.is_file()]

    def find_stats_files(self) -> List[Path]:
        """List stats artifacts in the output directory."""
        return [path for path in sorted(self.output_dir.glob("*_stats.txt")) if path.is_file()]

    def cleanup(self) -> None:
        """Remove the scratch directory and everything in it."""
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)
            logger.debug(f"Removed temporary directory: {self.temp_dir}")

    def __repr__(self) -> str:
        """Return string representation of workspace."""
        return f"Workspace(root_dir={self.root_dir}, output_dir={self.output_dir})"
