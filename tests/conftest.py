"""Shared pytest fixtures for all test modules."""

import gzip
import logging
from pathlib import Path
from typing import Any, Dict

import pytest

from vcfpipeline.config import load_config
from vcfpipeline.pipeline_core import Workspace

from tests.mocks.external_tools import FakeToolRunner

VCF_TEXT = (
    "##fileformat=VCFv4.2\n"
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">\n'
    "##contig=<ID=chr1,length=249250621>\n"
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
    "chr1\t100\t.\tA\tG\t50\tPASS\tDP=20\n"
    "chr1\t200\t.\tAT\tA\t45\tPASS\tDP=15\n"
    "chr1\t300\t.\tC\tT\t10\tPASS\tDP=30\n"
    "chr1\t400\t.\tG\tC\t60\tPASS\tDP=5\n"
)


def write_vcf(path: Path, text: str = VCF_TEXT) -> Path:
    """Write VCF text, gzip compressed when the name ends in .gz."""
    path = Path(path)
    if path.name.endswith(".gz"):
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write(text)
    else:
        path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def vcf_text() -> str:
    """Four records: one passing SNP, one passing indel, one low QUAL, one low DP."""
    return VCF_TEXT


@pytest.fixture
def default_config() -> Dict[str, Any]:
    """Packaged default configuration."""
    return load_config()


@pytest.fixture
def run_root(tmp_path) -> Path:
    """Run root with an empty input directory."""
    (tmp_path / "input_vcf").mkdir()
    return tmp_path


@pytest.fixture
def workspace(run_root, default_config) -> Workspace:
    """Workspace over run_root with output and temp directories created."""
    ws = Workspace(run_root, default_config)
    ws.create_directories()
    return ws


@pytest.fixture
def fake_tools(monkeypatch) -> FakeToolRunner:
    """Replace subprocess.run and PATH lookup with the fake tool runner."""
    runner = FakeToolRunner()
    monkeypatch.setattr("vcfpipeline.utils.subprocess.run", runner)
    monkeypatch.setattr("vcfpipeline.utils.shutil.which", lambda tool: f"/usr/bin/{tool}")
    return runner


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches to the package logger between tests."""
    yield
    pkg_logger = logging.getLogger("vcfpipeline")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)
