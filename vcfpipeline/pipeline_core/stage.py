"""
Stage - Abstract base class for all per-file pipeline stages.

Each stage wraps one step of the per-file state machine. Execution through
__call__ validates dependencies, logs timing and re-raises failures.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Set

from .context import PipelineContext

logger = logging.getLogger(__name__)


class Stage(ABC):
    """Abstract base class for all pipeline stages."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for the stage.

        Returns
        -------
        str
            The stage name used for dependency tracking and logging
        """
        pass

    @property
    def dependencies(self) -> Set[str]:
        """Stage names that must complete before this stage.

        Returns
        -------
        Set[str]
            Set of stage names this stage depends on
        """
        return set()

    @property
    def description(self) -> str:
        """Human-readable description for logging."""
        return f"Stage: {self.name}"

    def __call__(self, context: PipelineContext) -> PipelineContext:
        """Execute the stage with dependency checking and timing.

        Parameters
        ----------
        context : PipelineContext
            The pipeline context

        Returns
        -------
        PipelineContext
            Updated context after stage execution

        Raises
        ------
        RuntimeError
            If dependencies are not satisfied
        Exception
            If stage execution fails
        """
        missing_deps = [dep for dep in sorted(self.dependencies) if not context.is_complete(dep)]
        if missing_deps:
            raise RuntimeError(
                f"Stage '{self.name}' requires these stages to complete first: "
                f"{', '.join(missing_deps)}"
            )

        logger.debug(f"Executing {self.description}")
        start_time = time.time()

        try:
            updated_context = self._process(context)
        except Exception as e:
            elapsed = time.time() - start_time
            logger.debug(f"Stage '{self.name}' failed after {elapsed:.1f}s: {e}")
            raise

        elapsed = time.time() - start_time
        updated_context.mark_complete(self.name)
        logger.debug(f"Stage '{self.name}' completed in {elapsed:.1f}s")
        return updated_context

    @abstractmethod
    def _process(self, context: PipelineContext) -> PipelineContext:
        """Core processing logic - must be implemented by subclasses."""
        pass

    def __repr__(self) -> str:
        """Return string representation of the stage."""
        return f"{self.__class__.__name__}(name='{self.name}')"
