# File: vcfpipeline/__init__.py
# Location: vcfpipeline/vcfpipeline/__init__.py

"""
vcfpipeline Package.

This package orchestrates a linear VCF preprocessing pipeline (validation,
quality filtering, normalization, annotation and summary statistics) on top
of bcftools, bgzip and tabix, and renders a batch processing report.
"""

from .version import __version__
