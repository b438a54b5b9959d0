"""
Pipeline infrastructure for vcfpipeline.

This package provides the core abstractions of the per-file pipeline:
- PipelineContext: Processing state of one input file
- Stage: Abstract base class for all pipeline steps
- Workspace: Directory layout and artifact naming
- PipelineRunner: Sequential stage execution
"""

from .context import PipelineContext
from .runner import PipelineRunner
from .stage import Stage
from .workspace import Workspace

__all__ = [
    "PipelineContext",
    "Stage",
    "Workspace",
    "PipelineRunner",
]
