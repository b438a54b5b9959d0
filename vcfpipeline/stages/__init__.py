"""
Pipeline stages for vcfpipeline.

- processing_stages: the per-file steps from validation to statistics
"""

from .processing_stages import (
    AnnotationStage,
    NormalizationStage,
    QualityFilterStage,
    StatisticsStage,
    ValidationStage,
)


def build_file_stages():
    """Return fresh stage instances in execution order."""
    return [
        ValidationStage(),
        QualityFilterStage(),
        NormalizationStage(),
        AnnotationStage(),
        StatisticsStage(),
    ]


__all__ = [
    "AnnotationStage",
    "NormalizationStage",
    "QualityFilterStage",
    "StatisticsStage",
    "ValidationStage",
    "build_file_stages",
]
