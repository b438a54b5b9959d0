"""
PipelineContext - State of one input file as it moves through the stages.

This module provides the PipelineContext dataclass that flows through all
per-file stages, carrying configuration, the workspace and the artifacts
each stage produced or consumed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from .workspace import Workspace

logger = logging.getLogger(__name__)


@dataclass
class PipelineContext:
    """Container for the processing state of a single input VCF.

    Attributes
    ----------
    input_vcf : Path
        Input file being processed
    config : Dict[str, Any]
        Merged configuration from file and CLI
    workspace : Workspace
        Path authority for the run
    base_name : str
        Artifact base name derived from the input file name
    filtered_vcf : Optional[Path]
        Output of the quality filter
    normalized_vcf : Optional[Path]
        Output of normalization, None when it was skipped
    annotation_input : Optional[Path]
        Artifact handed to the annotation stage
    final_vcf : Optional[Path]
        Annotated, indexed final artifact
    stats_file : Optional[Path]
        Raw bcftools stats output
    """

    input_vcf: Path
    config: Dict[str, Any]
    workspace: "Workspace"

    base_name: str = ""
    completed_stages: Set[str] = field(default_factory=set)
    stage_results: Dict[str, Any] = field(default_factory=dict)

    filtered_vcf: Optional[Path] = None
    normalized_vcf: Optional[Path] = None
    normalization_skipped: bool = False
    annotation_input: Optional[Path] = None
    final_vcf: Optional[Path] = None
    stats_file: Optional[Path] = None

    def __post_init__(self):
        self.input_vcf = Path(self.input_vcf)
        if not self.base_name:
            self.base_name = self.workspace.base_name_for(self.input_vcf)

    def mark_complete(self, stage_name: str) -> None:
        """Mark a stage as complete."""
        self.completed_stages.add(stage_name)
        logger.debug(f"Stage '{stage_name}' marked as complete")

    def is_complete(self, stage_name: str) -> bool:
        """Check if a stage has been completed."""
        return stage_name in self.completed_stages

    def get_result(self, stage_name: str) -> Optional[Any]:
        """Get the stored result for a completed stage, or None."""
        return self.stage_results.get(stage_name)

    def __repr__(self) -> str:
        """Return string representation showing key state information."""
        return (
            f"PipelineContext("
            f"input_vcf={self.input_vcf.name}, "
            f"stages_completed={len(self.completed_stages)})"
        )
