"""
Error types for the VCF processing pipeline.

Two tiers of failure exist:
- Fatal errors (missing tools, failing tool invocations, bad configuration)
  propagate up to the CLI, which turns them into a process exit status.
- Validation failures of a single input file are absorbed by the batch
  orchestrator and counted.
"""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, stage: Optional[str] = None, details: Optional[Dict] = None):
        """Initialize pipeline error.

        Parameters
        ----------
        message : str
            Error message
        stage : str, optional
            Stage where error occurred
        details : dict, optional
            Additional error details
        """
        super().__init__(message)
        self.stage = stage
        self.details = details or {}


class ToolNotFoundError(PipelineError):
    """Raised when a required external tool is not found."""

    def __init__(self, tool: str, stage: Optional[str] = None):
        """Initialize tool not found error."""
        message = f"{tool} is not installed or not in PATH"
        super().__init__(message, stage, {"tool": tool})
        self.tool = tool


class ToolExecutionError(PipelineError):
    """Raised when an external tool exits with a non-zero status."""

    def __init__(self, cmd: List[str], returncode: int, stderr: str = ""):
        """Initialize tool execution error."""
        message = f"Command failed with exit code {returncode}: {' '.join(cmd)}"
        if stderr and stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message, None, {"cmd": cmd, "returncode": returncode})
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr


class VcfValidationError(PipelineError):
    """Raised when an input VCF fails structural validation."""

    def __init__(self, file_path: str, stage: Optional[str] = None):
        """Initialize validation error."""
        super().__init__(f"Validation failed for {file_path}", stage, {"file": file_path})
        self.file_path = file_path


class ConfigurationError(PipelineError):
    """Raised when the configuration or run environment is unusable."""
