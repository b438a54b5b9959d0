"""
Tests for the bcftools stats parser.

Absent or malformed summary values are reported as None.
"""

import logging

from vcfpipeline.stats import format_count, generate_stats, parse_bcftools_stats

STATS_REPORT = [
    "# This file was produced by bcftools stats (1.17+htslib-1.17)\n",
    "# SN\t[2]id\t[3]key\t[4]value\n",
    "SN\t0\tnumber of samples:\t3\n",
    "SN\t0\tnumber of records:\t120\n",
    "SN\t0\tnumber of SNPs:\t100\n",
    "SN\t0\tnumber of indels:\t20\n",
    "TSTV\t0\t60\t40\t1.50\t60\t40\t1.50\n",
]


def test_parse_complete_report():
    """The three key counts and every SN line are extracted."""
    parsed = parse_bcftools_stats(STATS_REPORT)

    assert (parsed.records, parsed.snps, parsed.indels) == (120, 100, 20)
    assert parsed.summary["number of samples"] == "3"
    assert len(parsed.sn_lines) == 4
    assert parsed.sn_lines[0] == "SN\t0\tnumber of samples:\t3"


def test_missing_lines_are_not_found():
    """Missing SN keys produce None rather than empty strings."""
    parsed = parse_bcftools_stats(["SN\t0\tnumber of records:\t5\n"])

    assert parsed.records == 5
    assert parsed.snps is None
    assert parsed.indels is None


def test_malformed_values_are_not_found():
    """Non-integer or truncated lines do not raise."""
    parsed = parse_bcftools_stats(
        ["SN\t0\tnumber of records:\tmany\n", "SN\t0\tnumber of SNPs:\n"]
    )

    assert parsed.records is None
    assert parsed.snps is None
    assert len(parsed.sn_lines) == 2


def test_format_count():
    """None renders as 'not found'."""
    assert format_count(None) == "not found"
    assert format_count(0) == "0"


def test_generate_stats_writes_and_logs(monkeypatch, tmp_path, caplog):
    """The raw report goes to the stats file and the key counts are logged."""
    stats_file = tmp_path / "sample_stats.txt"

    def mock_run_command(cmd, output_file=None, check=True):
        assert cmd == ["bcftools", "stats", "final.vcf.gz"]
        with open(output_file, "w") as f:
            f.writelines(STATS_REPORT[:4])

    monkeypatch.setattr("vcfpipeline.stats.run_command", mock_run_command)

    with caplog.at_level(logging.INFO, logger="vcfpipeline"):
        summary = generate_stats("final.vcf.gz", str(stats_file))

    assert summary.records == 120
    assert summary.snps is None
    assert "Statistics generated - Total: 120, SNPs: not found, INDELs: not found" in caplog.text
