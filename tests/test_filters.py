"""
Tests for filters module.

Checks the bcftools filter invocation and the record counts reported
before and after filtering.
"""

import logging

from tests.conftest import write_vcf
from vcfpipeline.filters import build_quality_expression, quality_filter


def test_quality_filter_command(monkeypatch):
    """Test quality_filter when run_command is mocked."""
    called_commands = []

    def mock_run_command(cmd, output_file=None, check=True):
        called_commands.append(cmd)

    monkeypatch.setattr("vcfpipeline.filters.run_command", mock_run_command)
    monkeypatch.setattr("vcfpipeline.utils.run_command", mock_run_command)
    monkeypatch.setattr("vcfpipeline.filters.count_variant_records", lambda path: 7)

    result = quality_filter("in.vcf", "out.vcf.gz")

    assert result.output_file == "out.vcf.gz"
    assert len(called_commands) == 2
    cmd = called_commands[0]
    assert cmd[:2] == ["bcftools", "filter"]
    i_idx = cmd.index("-i")
    assert cmd[i_idx + 1] == "QUAL >= 30 && INFO/DP >= 10"
    assert cmd[cmd.index("-O") + 1] == "z"
    assert cmd[cmd.index("-o") + 1] == "out.vcf.gz"
    assert cmd[-1] == "in.vcf"
    assert called_commands[1] == ["tabix", "-p", "vcf", "out.vcf.gz"]


def test_quality_filter_custom_thresholds(monkeypatch):
    """Overridden thresholds and threads end up in the command."""
    called_commands = []
    monkeypatch.setattr(
        "vcfpipeline.filters.run_command", lambda cmd, **kw: called_commands.append(cmd)
    )
    monkeypatch.setattr("vcfpipeline.filters.index_vcf", lambda path: path + ".tbi")
    monkeypatch.setattr("vcfpipeline.filters.count_variant_records", lambda path: 0)

    quality_filter("in.vcf.gz", "out.vcf.gz", min_qual=50, min_depth=25, cfg={"threads": 4})

    cmd = called_commands[0]
    assert "QUAL >= 50 && INFO/DP >= 25" in cmd
    assert cmd[cmd.index("--threads") + 1] == "4"
    assert cmd[-1] == "in.vcf.gz"


def test_build_quality_expression_float():
    """Fractional QUAL thresholds are rendered as given."""
    assert build_quality_expression(29.5, 8) == "QUAL >= 29.5 && INFO/DP >= 8"


def test_quality_filter_counts(fake_tools, tmp_path, vcf_text, caplog):
    """Counts before and after filtering are returned and logged."""
    input_vcf = write_vcf(tmp_path / "sample.vcf", vcf_text)
    output_vcf = tmp_path / "sample_filtered.vcf.gz"

    with caplog.at_level(logging.INFO, logger="vcfpipeline"):
        result = quality_filter(str(input_vcf), str(output_vcf))

    assert (result.input_count, result.output_count) == (4, 2)
    assert output_vcf.exists()
    assert (tmp_path / "sample_filtered.vcf.gz.tbi").exists()
    assert "Applying quality filters (QUAL >= 30, DP >= 10)" in caplog.text
    assert "Quality filtering complete: 4 -> 2 variants" in caplog.text
