"""Command-line interface for vcfpipeline."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import load_config
from .pipeline import cleanup, process_all_vcfs, process_vcf
from .pipeline_core import Workspace
from .pipeline_core.error_handling import ConfigurationError, PipelineError, ToolExecutionError
from .report import generate_report
from .utils import get_tool_version
from .validators import check_dependencies, validate_write_permission
from .version import __version__

logger = logging.getLogger("vcfpipeline")

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}
BATCH_MODES = ("all", "batch")
HELP_MODES = ("help", "-h", "--help")


def _number(value: str):
    """Parse a threshold, keeping integers integral."""
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid numeric value: {value!r}")


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for the vcfpipeline CLI."""
    parser = argparse.ArgumentParser(
        prog="vcfpipeline",
        description="vcfpipeline: validate, filter, normalize, annotate and summarize VCF files.",
        epilog=(
            "Modes:\n"
            "  all, batch      process every *.vcf / *.vcf.gz in the input directory (default)\n"
            "  single PATH     process exactly one VCF file\n"
            "  help            show this message"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("mode", nargs="?", default="all", help="Run mode (see below)")
    parser.add_argument("path", nargs="?", help="VCF file for 'single' mode")

    general_group = parser.add_argument_group("General Options")
    general_group.add_argument(
        "-h", "--help", action="store_true", help="Show this help message and exit"
    )
    general_group.add_argument(
        "--version",
        action="version",
        version=f"vcfpipeline {__version__}",
        help="Show the current version and exit",
    )
    general_group.add_argument(
        "--log-level",
        choices=list(LOG_LEVEL_MAP),
        default="INFO",
        help="Set the logging level",
    )
    general_group.add_argument("-c", "--config", help="Path to configuration file", default=None)
    general_group.add_argument(
        "--root-dir",
        default=None,
        help="Run root holding input_vcf/, processed_vcf/, temp/ and processing.log "
        "(default: current directory)",
    )
    general_group.add_argument(
        "--keep-temp",
        action="store_true",
        default=None,
        help="Keep intermediate files in the temp directory after the run.",
    )

    filter_group = parser.add_argument_group("Filtering & Annotation")
    filter_group.add_argument(
        "--min-qual", type=_number, default=None, help="Minimum QUAL (default from config: 30)"
    )
    filter_group.add_argument(
        "--min-depth", type=int, default=None, help="Minimum INFO/DP (default from config: 10)"
    )
    filter_group.add_argument(
        "--reference",
        default=None,
        help="Reference FASTA, relative to the run root (default: reference.fa). "
        "Normalization is skipped when the file does not exist.",
    )
    filter_group.add_argument(
        "--annotation-source",
        default=None,
        help="Indexed file providing values for the annotated INFO field. "
        "Without it only the header definition is added.",
    )
    filter_group.add_argument(
        "--threads", type=int, default=None, help="Threads passed to bcftools"
    )
    return parser


def configure_logging(log_level: str, log_file: Optional[Path] = None) -> None:
    """Send vcfpipeline log records to stdout and append them to the log file."""
    pkg_logger = logging.getLogger("vcfpipeline")
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    level = LOG_LEVEL_MAP[log_level]
    pkg_logger.setLevel(level)
    pkg_logger.propagate = False

    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(formatter)
    pkg_logger.addHandler(sh)

    if log_file is not None:
        fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        fh.setFormatter(formatter)
        pkg_logger.addHandler(fh)
        logger.debug(f"Logging to file enabled: {log_file}")


def build_run_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Load the configuration and apply CLI overrides."""
    cfg = load_config(args.config)
    overrides = {
        "min_qual": args.min_qual,
        "min_depth": args.min_depth,
        "reference_fasta": args.reference,
        "annotation_source": args.annotation_source,
        "threads": args.threads,
        "keep_temp": args.keep_temp,
    }
    for key, value in overrides.items():
        if value is not None:
            cfg[key] = value
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    """Run main entry point for the vcfpipeline CLI.

    Steps:
        1. Parse arguments and load configuration.
        2. Check write permission of the run root and configure logging.
        3. Check that bcftools, tabix and bgzip are available.
        4. Run batch or single-file mode.
        5. Write the processing report and purge the temp directory.

    Returns
    -------
    int
        0 on success, 1 on usage, configuration, permission or dependency
        errors and on a single file failing validation, or the exit status
        of a failing external tool.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.help or args.mode in HELP_MODES:
        parser.print_help()
        return 0

    root_dir = Path(args.root_dir or os.getcwd()).resolve()

    try:
        cfg = build_run_config(args)
    except (FileNotFoundError, ValueError) as e:
        configure_logging(args.log_level)
        logger.error(f"Configuration error: {e}")
        return 1

    workspace = Workspace(root_dir, cfg)

    try:
        validate_write_permission(str(root_dir))
    except ConfigurationError as e:
        configure_logging(args.log_level)
        logger.error(str(e))
        return 1

    configure_logging(args.log_level, workspace.log_file)
    logger.info("Starting VCF Processing Pipeline")
    logger.info(f"Script Directory: {root_dir}")

    try:
        workspace.create_directories()
        check_dependencies(cfg.get("required_tools", ["bcftools", "tabix", "bgzip"]))
        if logger.isEnabledFor(logging.DEBUG):
            for tool in cfg.get("required_tools", []):
                logger.debug(f"{tool} version: {get_tool_version(tool)}")

        if args.mode == "single":
            if not args.path:
                logger.error("Please provide VCF file path for single file processing")
                parser.print_usage()
                return 1
            if process_vcf(args.path, workspace, cfg) is None:
                return 1
        elif args.mode in BATCH_MODES:
            process_all_vcfs(workspace, cfg)
        else:
            logger.error(f"Unknown option: {args.mode}")
            parser.print_usage()
            return 1

        generate_report(workspace, cfg)
        if cfg.get("keep_temp"):
            logger.info(f"Keeping temporary files in {workspace.temp_dir}")
        else:
            cleanup(workspace)
    except ToolExecutionError as e:
        logger.error(f"Pipeline failed: {e}")
        return e.returncode if e.returncode > 0 else 1
    except PipelineError as e:
        logger.error(str(e))
        return 1

    logger.info("VCF Processing Pipeline completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
