"""
PipelineRunner - Executes per-file stages strictly in order.

Stages run one after another in the order given; there is no branching
back and no parallelism. A stage that raises ends the run of that file.
"""

import logging
import time
from typing import Dict, List

from .context import PipelineContext
from .stage import Stage

logger = logging.getLogger(__name__)


class PipelineRunner:
    """Runs a list of stages sequentially over one PipelineContext."""

    def __init__(self):
        """Initialize the runner with empty timing records."""
        self._execution_times: Dict[str, float] = {}

    def run(self, stages: List[Stage], context: PipelineContext) -> PipelineContext:
        """Execute all stages in order.

        Parameters
        ----------
        stages : List[Stage]
            Stages to execute
        context : PipelineContext
            Initial pipeline context

        Returns
        -------
        PipelineContext
            Final context after all stages complete

        Raises
        ------
        ValueError
            If two stages share a name
        Exception
            If any stage fails
        """
        names = [stage.name for stage in stages]
        if len(set(names)) != len(names):
            raise ValueError("Duplicate stage names detected")

        logger.debug(f"Running {len(stages)} stages for {context.input_vcf.name}: {names}")
        start_time = time.time()
        for stage in stages:
            stage_start = time.time()
            context = stage(context)
            self._execution_times[stage.name] = time.time() - stage_start

        logger.debug(
            f"All stages finished for {context.input_vcf.name} in {time.time() - start_time:.1f}s"
        )
        return context

    def get_execution_times(self) -> Dict[str, float]:
        """Return per-stage wall-clock seconds of the last run."""
        return dict(self._execution_times)
