"""CLI for burndown interpolation and resampling."""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

import click
from pydantic import ValidationError

from burndown_estimator import config
from burndown_estimator.models import BurndownConfig, BurndownInput, ProcessedBurndown
from burndown_estimator.pipeline import load_burndown, load_burndowns
from burndown_estimator.utils import LoggingObserver, normalize_burndown


def _read_input(path: Path) -> BurndownInput | None:
    try:
        return BurndownInput.model_validate_json(path.read_text())
    except ValidationError as e:
        click.echo(f"Error: invalid burndown document {path}:\n{e}", err=True)
        return None


def _dump(results: list[ProcessedBurndown]) -> list[dict]:
    return [r.model_dump(mode="json") for r in results]


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output JSON file (stdout when omitted)",
)
@click.option(
    "--resample",
    default=config.DEFAULT_RESAMPLE,
    show_default=True,
    help="Bucket size: year, month, week, day, or no/raw to keep age bands",
)
@click.option("--relative", is_flag=True, help="Normalize every column to sum to 1")
@click.option(
    "--survival/--no-survival",
    default=True,
    show_default=True,
    help="Log the ratio of survived lines",
)
@click.option(
    "--start-date",
    type=click.DateTime(),
    default=None,
    help="Drop output days before this date (UTC)",
)
@click.option(
    "--end-date",
    type=click.DateTime(),
    default=None,
    help="Drop output days after this date (UTC)",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def main(
    source: Path,
    output: Path | None,
    resample: str,
    relative: bool,
    survival: bool,
    start_date: datetime | None,
    end_date: datetime | None,
    verbose: bool,
) -> None:
    """Interpolate and resample a decoded burndown document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger(config.LOGGER_NAME)
    if survival and not verbose:
        # survival report is logged at INFO
        logger.setLevel(logging.INFO)

    document = _read_input(source)
    if document is None:
        sys.exit(1)
    if document.matrix is None and not document.files:
        click.echo("Error: document holds neither a matrix nor files", err=True)
        sys.exit(1)

    burndown_config = BurndownConfig(
        resample=resample,
        report_survival=survival,
        start_date=start_date,
        end_date=end_date,
    )
    observer = LoggingObserver(logger)

    results: list[ProcessedBurndown] = []
    fail_count = 0

    if document.matrix is not None:
        result = load_burndown(
            document.header, document.name, document.matrix, burndown_config, observer
        )
        if isinstance(result, ProcessedBurndown):
            results.append(result)
        else:
            fail_count += 1
            click.echo(f"  [{result.stage.value}] {result.message}", err=True)

    if document.files:
        file_results, errors = load_burndowns(
            document.header, document.files, burndown_config, observer
        )
        results.extend(file_results)
        for e in errors:
            fail_count += 1
            click.echo(f"  [{e.stage.value}] {e.details.get('name')}: {e.message}", err=True)

    if relative:
        results = [normalize_burndown(r) for r in results]

    for r in results:
        for w in r.warnings:
            click.echo(f"  Warning: {r.name}: {w}", err=True)

    payload = _dump(results)
    text = json.dumps(payload[0] if len(payload) == 1 and not document.files else payload, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text)
        if verbose:
            click.echo(f"Output: {output} ({len(results)} burndowns)")
    else:
        click.echo(text)

    if fail_count > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
