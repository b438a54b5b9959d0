# File: vcfpipeline/report.py
# Location: vcfpipeline/vcfpipeline/report.py

"""
Report generation module.

Scans the output directory for `*_stats.txt` artifacts and renders the
plain-text batch report from a jinja2 template. A tab-separated summary
with one row per stats file is written alongside it.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from jinja2 import Environment, FileSystemLoader

from .filters import DEFAULT_MIN_DEPTH, DEFAULT_MIN_QUAL
from .pipeline_core import Workspace
from .stats import read_stats_file
from .version import __version__

logger = logging.getLogger("vcfpipeline")

REPORT_TEMPLATE = "processing_report.txt.j2"
SUMMARY_COLUMNS = ["sample", "records", "snps", "indels"]


def _stats_base_name(stats_file: Path) -> str:
    return stats_file.name[: -len("_stats.txt")]


def collect_report_entries(workspace: Workspace, max_lines: int = 10) -> List[Dict[str, Any]]:
    """
    Read every stats artifact of the output directory.

    Parameters
    ----------
    workspace : Workspace
        Workspace whose output directory is scanned.
    max_lines : int
        Number of SN lines kept verbatim per file.

    Returns
    -------
    list of dict
        One entry per stats file with keys name, lines and summary.
    """
    entries = []
    for stats_file in workspace.find_stats_files():
        summary = read_stats_file(str(stats_file))
        entries.append(
            {
                "name": _stats_base_name(stats_file),
                "lines": summary.sn_lines[:max_lines],
                "summary": summary,
            }
        )
    return entries


def write_summary_table(entries: List[Dict[str, Any]], summary_file: Path) -> pd.DataFrame:
    """Write the per-file counts as TSV; counts that were not found stay empty."""
    rows = [
        {
            "sample": entry["name"],
            "records": entry["summary"].records,
            "snps": entry["summary"].snps,
            "indels": entry["summary"].indels,
        }
        for entry in entries
    ]
    df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    for col in SUMMARY_COLUMNS[1:]:
        df[col] = df[col].astype("Int64")
    df.to_csv(summary_file, sep="\t", index=False)
    return df


def generate_report(workspace: Workspace, cfg: Dict[str, Any]) -> Path:
    """
    Render the processing report for the current output directory.

    Quality and depth thresholds are taken from the run configuration, so
    overridden thresholds are reported as they were applied.

    Parameters
    ----------
    workspace : Workspace
        Run workspace.
    cfg : dict
        Run configuration.

    Returns
    -------
    Path
        Path to the written report.
    """
    logger.info("Generating processing report")

    entries = collect_report_entries(workspace, int(cfg.get("report_summary_lines", 10)))

    templates_dir = Path(__file__).parent / "templates"
    if not templates_dir.exists():
        raise FileNotFoundError(f"Templates directory not found at: {templates_dir}")

    env = Environment(loader=FileSystemLoader(str(templates_dir)), keep_trailing_newline=True)
    template = env.get_template(REPORT_TEMPLATE)
    content = template.render(
        processing_date=datetime.now().strftime("%a %b %d %H:%M:%S %Y"),
        version=__version__,
        author=cfg.get("report_author"),
        contact=cfg.get("report_contact"),
        input_dir=workspace.input_dir,
        output_dir=workspace.output_dir,
        min_qual=cfg.get("min_qual", DEFAULT_MIN_QUAL),
        min_depth=cfg.get("min_depth", DEFAULT_MIN_DEPTH),
        files=entries,
    )

    workspace.output_dir.mkdir(parents=True, exist_ok=True)
    with open(workspace.report_file, "w", encoding="utf-8") as out_f:
        out_f.write(content)

    write_summary_table(entries, workspace.summary_file)
    logger.info(f"Processing report generated: {workspace.report_file}")
    return workspace.report_file
