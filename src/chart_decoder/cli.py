"""CLI for decoding chart snapshots into JSON and CSV."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import click
from pydantic import ValidationError

from chart_decoder import config
from chart_decoder.models import ChartSnapshot, DecodedResult, DecoderConfig
from chart_decoder.nodes.series_assembly import build_table, table_to_csv
from chart_decoder.pipeline import run_pipeline


def load_snapshot(path: Path) -> ChartSnapshot:
    return ChartSnapshot.model_validate_json(path.read_text())


def write_outputs(output: DecodedResult, json_path: Path, csv_path: Path | None) -> None:
    json_path.write_text(json.dumps(output.model_dump(mode="json"), indent=2))
    if csv_path is not None:
        csv_path.write_text(table_to_csv(build_table(output)))


@click.command()
@click.argument("snapshots", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output JSON file (single snapshot)",
)
@click.option("--csv", "csv_output", type=click.Path(path_type=Path), help="Output CSV file (single snapshot)")
@click.option("--output-dir", type=click.Path(path_type=Path), help="Output directory (batch mode)")
@click.option(
    "--row-tolerance",
    type=float,
    default=config.LEGEND_ROW_TOLERANCE_PX,
    help="Max vertical distance (px) between legend items on one row",
)
@click.option(
    "--range-end-inclusive",
    is_flag=True,
    help="Treat the end of the date range text as the last plotted day",
)
@click.option("--source", help="Source identifier recorded in the output metadata")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def main(
    snapshots: tuple[Path, ...],
    output: Path | None,
    csv_output: Path | None,
    output_dir: Path | None,
    row_tolerance: float,
    range_end_inclusive: bool,
    source: str | None,
    verbose: bool,
) -> None:
    """Recover time-series data from chart snapshot JSON files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not snapshots:
        click.echo("Error: No input snapshots provided", err=True)
        sys.exit(1)

    batch = len(snapshots) > 1 or output_dir is not None

    if batch and (output or csv_output):
        click.echo("Error: Use --output-dir for batch processing", err=True)
        sys.exit(1)

    if output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

    decoder_config = DecoderConfig(
        legend_row_tolerance=row_tolerance,
        range_end_exclusive=not range_end_inclusive,
    )
    run_timestamp = datetime.now(timezone.utc).isoformat()

    success_count = 0
    fail_count = 0
    for snapshot_path in snapshots:
        try:
            snapshot = load_snapshot(snapshot_path)
        except (OSError, ValidationError) as e:
            fail_count += 1
            click.echo(f"Error reading {snapshot_path}: {e}", err=True)
            continue

        update: dict[str, str] = {}
        if snapshot.timestamp is None:
            update["timestamp"] = run_timestamp
        if source:
            update["source_identifier"] = source
        if update:
            snapshot = snapshot.model_copy(update=update)

        if verbose:
            click.echo(f"Decoding: {snapshot_path}")
        state = run_pipeline(snapshot, decoder_config)

        if batch:
            out_dir = output_dir or snapshot_path.parent
            json_path = out_dir / f"{snapshot_path.stem}{config.DEFAULT_JSON_SUFFIX}"
            csv_path: Path | None = out_dir / f"{snapshot_path.stem}{config.DEFAULT_CSV_SUFFIX}"
        else:
            json_path = output or Path(f"{snapshot_path.stem}{config.DEFAULT_JSON_SUFFIX}")
            csv_path = csv_output

        if state.output is None:
            fail_count += 1
            click.echo(f"Error decoding {snapshot_path}:", err=True)
            for e in state.errors:
                click.echo(f"  [{e.stage.value}] {e.message}", err=True)
            continue

        write_outputs(state.output, json_path, csv_path)
        success_count += 1

        if verbose:
            click.echo(
                f"  Output: {json_path} ({len(state.output.series)} series, "
                f"{len(state.output.dates)} dates)"
            )
        for e in state.errors:
            click.echo(f"  Warning [{e.stage.value}] {e.message}", err=True)

    if batch:
        click.echo(
            f"Processed {success_count + fail_count} snapshots: "
            f"{success_count} success, {fail_count} failed"
        )

    if fail_count > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
