"""CLI command computing the SHA-256 digest of a file.

The file is hashed on a worker thread in fixed-size chunks while the command
polls the controller and renders progress with tqdm on stderr.

Examples
--------
  streamhash digest big.iso
  streamhash digest big.iso --chunk-size 8388608 --json
  streamhash digest big.iso --description "release image" --expect 3a7b...
  streamhash digest huge.bin --max-size 0 --no-progress
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from tqdm import tqdm

from streamhash.config import Config, MESSAGES
from streamhash.controller import JobController, JobSnapshot, JobStatus
from streamhash.errors import SourceReadError, ValidationError
from streamhash.source import FileSource


@click.command(name="digest")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "chunk_size",
    "--chunk-size",
    type=click.IntRange(min=1),
    default=Config.DEFAULT_CHUNK_SIZE,
    show_default=True,
    help="Bytes read and hashed per chunk",
)
@click.option(
    "max_size",
    "--max-size",
    type=click.IntRange(min=0),
    default=Config.MAX_FILE_SIZE_BYTES,
    show_default=True,
    help="Largest accepted file in bytes (0 = unlimited)",
)
@click.option(
    "description",
    "--description",
    type=str,
    default="",
    help="Optional description stored with the result",
)
@click.option(
    "expect",
    "--expect",
    type=str,
    required=False,
    help="Expected hex digest; exit with an error on mismatch",
)
@click.option(
    "as_json",
    "--json",
    is_flag=True,
    help="Print the result as a JSON record",
)
@click.option(
    "no_progress",
    "--no-progress",
    is_flag=True,
    help="Do not show the progress bar",
)
def digest(
    path: Path,
    chunk_size: int,
    max_size: int,
    description: str,
    expect: str | None,
    as_json: bool,
    no_progress: bool,
) -> None:
    """Compute the SHA-256 digest of PATH without loading it into memory."""

    try:
        try:
            source = FileSource(path)
        except SourceReadError as e:
            raise click.ClickException(f"{MESSAGES['errors']['file_read_error']} ({e})")

        controller = JobController(
            max_size=max_size or None,
            chunk_size=chunk_size,
        )
        with tqdm(total=100, unit="%", desc=source.name, disable=no_progress, leave=False) as pbar:

            def _render(snap: JobSnapshot) -> None:
                if snap.percent > pbar.n:
                    pbar.update(snap.percent - pbar.n)

            controller.subscribe(_render)
            try:
                controller.start(source, description=description)
            except ValidationError as e:
                raise click.ClickException(str(e))
            try:
                snap = controller.wait()
            except KeyboardInterrupt:
                controller.cancel()
                click.secho("Cancelled.", fg="yellow", err=True)
                raise SystemExit(130)

        if snap.status is JobStatus.ERROR:
            raise click.ClickException(snap.error_message or MESSAGES["errors"]["computation_failed"])
        result = snap.result
        if result is None:
            raise click.ClickException(MESSAGES["errors"]["computation_failed"])

        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        else:
            click.echo(f"{result.digest_hex}  {path}")

        if expect is not None and expect.strip().lower() != result.digest_hex:
            raise click.ClickException(
                f"SHA256 mismatch for {path}: expected {expect.strip().lower()}, got {result.digest_hex}"
            )
    except click.ClickException:
        raise
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
