from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click

from .core.constants import DEFAULT_WORKERS, MAX_WORKERS
from .core.errors import InvalidArguments, InvalidInput, SequenceReadFailure
from .report import Reporter

logger = logging.getLogger(__name__)

USAGE = (
    "A tool to analyse scannet *.sens data.\n\n"
    "Error, invalid arguments.\n"
    "Mandatory: input *.sens file or scans/ dataset root\n"
    "Optional path to dataset dir"
)

# exit codes
EXIT_INVALID = 1
EXIT_READ_FAILURE = 2


class CheckFailed(click.ClickException):
    def __init__(self, message: str, exit_code: int = EXIT_INVALID) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_path", type=click.Path())
@click.argument("dataset_dir", type=click.Path(), required=False)
@click.option("--workers", type=click.IntRange(1, MAX_WORKERS), default=DEFAULT_WORKERS, show_default=True,
              help="Scenes analyzed concurrently in dataset mode")
@click.option("--out", "out_dir", type=click.Path(file_okay=False), default=None,
              help="Also write scenes.parquet, failures.jsonl and summary.yaml here")
@click.option("--color/--no-color", default=None,
              help="Highlight yes/no verdicts (default: only on a terminal)")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]), default="WARNING",
              show_default=True)
def cli(input_path, dataset_dir, workers, out_dir, color, log_level):
    """Check ScanNet .sens sequences for monotonic timestamps and legal camera poses.

    INPUT_PATH is either a `scans` dataset root or a single `.sens` file.
    """
    from .steps.scan_dataset import scan
    from .steps.export import export_outcome

    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if dataset_dir is not None:
        logger.warning("second argument %s is accepted but not used", dataset_dir)

    reporter = Reporter(color=True if color is None else color)

    def echo(line: str) -> None:
        # color=None lets click strip ANSI codes when stdout is not a terminal
        click.echo(line, color=color)

    def on_header(header):
        for line in reporter.header_lines(header):
            echo(line)

    def on_illegal(diag):
        echo(reporter.illegal_pose_line(diag))

    try:
        outcome = scan(input_path, workers=workers, on_illegal=on_illegal, on_header=on_header)
    except InvalidInput as e:
        raise CheckFailed(str(e)) from e
    except SequenceReadFailure as e:
        raise CheckFailed(str(e), exit_code=EXIT_READ_FAILURE) from e

    if outcome.report is not None:
        for scene in outcome.scenes:
            for line in reporter.scene_lines(scene):
                echo(line)
        for line in reporter.dataset_lines(outcome.report):
            echo(line)
    else:
        for line in reporter.sequence_lines(outcome.health):
            echo(line)

    if out_dir:
        summary = export_outcome(outcome, Path(out_dir))
        click.echo(f"[sens-check] wrote report to {out_dir} ({summary['processed_sequences']} processed)")


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point. Argument errors exit with 1 rather than click's default 2."""
    try:
        cli.main(args=argv, prog_name="sens-check", standalone_mode=False)
    except click.UsageError as e:
        err = InvalidArguments(e.format_message())
        click.echo(USAGE, err=True)
        click.echo(str(err), err=True)
        return EXIT_INVALID
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return EXIT_INVALID
    return 0


if __name__ == "__main__":
    sys.exit(main())
