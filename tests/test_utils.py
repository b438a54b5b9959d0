"""
Test module for utility functions in vcfpipeline/utils.py.

Covers command execution, tool lookup, record counting and base-name
derivation.
"""

import gzip
import subprocess
from unittest.mock import Mock

import pytest

from tests.conftest import write_vcf
from vcfpipeline.pipeline_core.error_handling import ToolExecutionError
from vcfpipeline.utils import (
    CommandResult,
    check_external_tools,
    count_variant_records,
    get_tool_version,
    index_vcf,
    remove_vcf_extensions,
    run_command,
)


class TestRemoveVcfExtensions:
    """Tests for base-name derivation."""

    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("sample1.vcf.gz", "sample1"),
            ("sample2.vcf", "sample2"),
            ("sample3.gz", "sample3"),
            ("sample4.txt", "sample4.txt"),
            ("tumor.normal.vcf.gz", "tumor.normal"),
        ],
    )
    def test_extensions(self, filename, expected):
        """Single and double extensions are both stripped."""
        assert remove_vcf_extensions(filename) == expected


class TestRunCommand:
    """Tests for the subprocess wrapper."""

    def test_returns_captured_output(self, monkeypatch):
        """Successful commands return exit status, stdout and stderr."""
        mock_run = Mock(return_value=subprocess.CompletedProcess(["x"], 0, "out\n", "warn\n"))
        monkeypatch.setattr("vcfpipeline.utils.subprocess.run", mock_run)

        result = run_command(["bcftools", "view", "in.vcf"])

        assert result == CommandResult(0, "out\n", "warn\n")
        args, kwargs = mock_run.call_args
        assert args[0] == ["bcftools", "view", "in.vcf"]
        assert "shell" not in kwargs

    def test_arguments_are_not_interpolated(self, monkeypatch):
        """Arguments with spaces and quotes reach the tool as single list items."""
        mock_run = Mock(return_value=subprocess.CompletedProcess(["x"], 0, "", ""))
        monkeypatch.setattr("vcfpipeline.utils.subprocess.run", mock_run)

        expr = 'QUAL >= 30 && INFO/DP >= 10; rm -rf "/"'
        run_command(["bcftools", "filter", "-i", expr, "in file.vcf"])

        called = mock_run.call_args[0][0]
        assert called[3] == expr
        assert called[4] == "in file.vcf"

    def test_non_zero_exit_raises(self, monkeypatch):
        """A failing tool raises ToolExecutionError carrying its exit code."""
        mock_run = Mock(return_value=subprocess.CompletedProcess(["x"], 3, "", "boom"))
        monkeypatch.setattr("vcfpipeline.utils.subprocess.run", mock_run)

        with pytest.raises(ToolExecutionError) as exc_info:
            run_command(["bcftools", "norm", "in.vcf"])

        assert exc_info.value.returncode == 3
        assert exc_info.value.stderr == "boom"
        assert "bcftools norm in.vcf" in str(exc_info.value)

    def test_non_zero_exit_without_check(self, monkeypatch):
        """With check=False the exit status is returned instead of raised."""
        mock_run = Mock(return_value=subprocess.CompletedProcess(["x"], 1, "", "bad"))
        monkeypatch.setattr("vcfpipeline.utils.subprocess.run", mock_run)

        result = run_command(["bgzip", "-t", "x.vcf.gz"], check=False)

        assert result.returncode == 1
        assert result.stderr == "bad"

    def test_output_file_receives_stdout(self, monkeypatch, tmp_path):
        """stdout is streamed into output_file when one is given."""

        def fake_run(cmd, stdout=None, stderr=None, text=False):
            stdout.write("SN\t0\tnumber of records:\t2\n")
            return subprocess.CompletedProcess(cmd, 0, None, "")

        monkeypatch.setattr("vcfpipeline.utils.subprocess.run", fake_run)
        out = tmp_path / "stats.txt"

        result = run_command(["bcftools", "stats", "x.vcf.gz"], output_file=str(out))

        assert result.returncode == 0
        assert result.stdout == ""
        assert out.read_text() == "SN\t0\tnumber of records:\t2\n"


def test_index_vcf_calls_tabix(monkeypatch):
    """index_vcf builds a tabix VCF index and returns its path."""
    calls = []
    monkeypatch.setattr("vcfpipeline.utils.run_command", lambda cmd: calls.append(cmd))

    assert index_vcf("out.vcf.gz") == "out.vcf.gz.tbi"
    assert calls == [["tabix", "-p", "vcf", "out.vcf.gz"]]


def test_check_external_tools_reports_missing(monkeypatch):
    """Missing executables are returned in the order given."""
    available = {"bcftools"}
    monkeypatch.setattr(
        "vcfpipeline.utils.shutil.which",
        lambda tool: f"/usr/bin/{tool}" if tool in available else None,
    )

    assert check_external_tools(["bcftools", "tabix", "bgzip"]) == ["tabix", "bgzip"]
    assert check_external_tools(["bcftools"]) == []


@pytest.mark.parametrize("name", ["plain.vcf", "compressed.vcf.gz"])
def test_count_variant_records(tmp_path, vcf_text, name):
    """Header lines are not counted, for plain and gzip input alike."""
    path = write_vcf(tmp_path / name, vcf_text)
    assert count_variant_records(str(path)) == 4


@pytest.mark.parametrize("name", ["latin1.vcf", "latin1.vcf.gz"])
def test_count_variant_records_non_utf8(tmp_path, name):
    """Records are counted as bytes, whatever their encoding."""
    content = (
        b"##fileformat=VCFv4.2\n"
        b"#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
        b"chr1\t100\t.\tA\tG\t50\tPASS\tDP=20;NOTE=caf\xe9\n"
        b"chr1\t200\t.\tC\tT\t60\tPASS\tDP=30\n"
    )
    path = tmp_path / name
    if name.endswith(".gz"):
        with gzip.open(path, "wb") as f:
            f.write(content)
    else:
        path.write_bytes(content)

    assert count_variant_records(str(path)) == 2


def test_get_tool_version(fake_tools):
    """Version strings are read from the tool's --version output."""
    assert get_tool_version("bcftools") == "bcftools 1.17"
    assert get_tool_version("tabix") == "tabix (htslib) 1.17"
    assert get_tool_version("samtools") == "N/A"
