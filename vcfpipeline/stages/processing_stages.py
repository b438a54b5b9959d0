"""
Processing stages - the per-file state machine.

Validate -> Filter -> (Normalize | Skip) -> Annotate -> Stats

Each stage wraps one module-level step function and records the artifacts
it produced on the PipelineContext. Only ValidationStage fails in a way the
batch orchestrator absorbs (VcfValidationError); tool failures propagate.
"""

import logging
from typing import Set

from ..annotator import annotate_variants
from ..filters import DEFAULT_MIN_DEPTH, DEFAULT_MIN_QUAL, quality_filter
from ..normalizer import normalize_variants
from ..pipeline_core import PipelineContext, Stage
from ..pipeline_core.error_handling import VcfValidationError
from ..stats import generate_stats
from ..validators import validate_vcf_file

logger = logging.getLogger(__name__)


class ValidationStage(Stage):
    """Check existence, compressed-stream integrity and the VCF header."""

    @property
    def name(self) -> str:
        """Return the stage name."""
        return "validation"

    @property
    def description(self) -> str:
        """Return a description of what this stage does."""
        return "Validate input VCF"

    def _process(self, context: PipelineContext) -> PipelineContext:
        """Raise VcfValidationError when the input fails any check."""
        if not validate_vcf_file(str(context.input_vcf), logging.getLogger("vcfpipeline")):
            raise VcfValidationError(str(context.input_vcf), self.name)
        return context


class QualityFilterStage(Stage):
    """Apply QUAL and INFO/DP thresholds with bcftools filter."""

    @property
    def name(self) -> str:
        """Return the stage name."""
        return "quality_filter"

    @property
    def description(self) -> str:
        """Return a description of what this stage does."""
        return "Apply quality filters"

    @property
    def dependencies(self) -> Set[str]:
        """Return the set of stage names this stage depends on."""
        return {"validation"}

    def _process(self, context: PipelineContext) -> PipelineContext:
        """Filter the input into the scratch directory."""
        output_vcf = context.workspace.get_intermediate_path(context.base_name, "filtered")
        result = quality_filter(
            str(context.input_vcf),
            str(output_vcf),
            context.config.get("min_qual", DEFAULT_MIN_QUAL),
            context.config.get("min_depth", DEFAULT_MIN_DEPTH),
            context.config,
        )
        context.filtered_vcf = output_vcf
        context.stage_results[self.name] = result
        return context


class NormalizationStage(Stage):
    """Normalize against the reference genome, or skip when it is absent."""

    @property
    def name(self) -> str:
        """Return the stage name."""
        return "normalization"

    @property
    def description(self) -> str:
        """Return a description of what this stage does."""
        return "Normalize variants against reference"

    @property
    def dependencies(self) -> Set[str]:
        """Return the set of stage names this stage depends on."""
        return {"quality_filter"}

    def _process(self, context: PipelineContext) -> PipelineContext:
        """Pick the annotation input depending on reference availability."""
        workspace = context.workspace
        if workspace.has_reference():
            output_vcf = workspace.get_intermediate_path(context.base_name, "normalized")
            normalize_variants(
                str(context.filtered_vcf),
                str(output_vcf),
                str(workspace.reference_fasta),
                context.config,
            )
            context.normalized_vcf = output_vcf
            context.annotation_input = output_vcf
        else:
            logger.warning("Reference genome not found, skipping normalization")
            context.normalization_skipped = True
            context.annotation_input = context.filtered_vcf
        return context


class AnnotationStage(Stage):
    """Inject the configured INFO header definition into the final VCF."""

    @property
    def name(self) -> str:
        """Return the stage name."""
        return "annotation"

    @property
    def description(self) -> str:
        """Return a description of what this stage does."""
        return "Annotate variants"

    @property
    def dependencies(self) -> Set[str]:
        """Return the set of stage names this stage depends on."""
        return {"normalization"}

    def _process(self, context: PipelineContext) -> PipelineContext:
        """Write the final artifact into the output directory."""
        workspace = context.workspace
        final_vcf = workspace.get_final_path(context.base_name)
        header_file = workspace.get_temp_path(f"{context.base_name}_annotation_header.txt")
        annotate_variants(
            str(context.annotation_input),
            str(final_vcf),
            str(header_file),
            context.config.get("annotation_source"),
            context.config,
        )
        context.final_vcf = final_vcf
        return context


class StatisticsStage(Stage):
    """Run bcftools stats on the final artifact."""

    @property
    def name(self) -> str:
        """Return the stage name."""
        return "statistics"

    @property
    def description(self) -> str:
        """Return a description of what this stage does."""
        return "Generate summary statistics"

    @property
    def dependencies(self) -> Set[str]:
        """Return the set of stage names this stage depends on."""
        return {"annotation"}

    def _process(self, context: PipelineContext) -> PipelineContext:
        """Write `<base>_stats.txt` next to the final artifact."""
        stats_file = context.workspace.get_stats_path(context.base_name)
        context.stage_results[self.name] = generate_stats(
            str(context.final_vcf), str(stats_file), context.config
        )
        context.stats_file = stats_file
        return context
