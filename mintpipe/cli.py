#!/usr/bin/env python3
"""CLI commands for uploading catalogs and minting from them."""

import asyncio
import json
from pathlib import Path
from typing import Any

import click

from mintpipe.content_store.base import ContentStore
from mintpipe.content_store.config import create_content_store
from mintpipe.core.config import Settings
from mintpipe.core.logging import configure_logging
from mintpipe.randomness.coordinator import RandomnessCoordinator
from mintpipe.randomness.errors import CoordinatorError
from mintpipe.randomness.oracle import LocalRandomnessOracle
from mintpipe.uploader.metadata import metadata_builder_for
from mintpipe.uploader.models import MintableCatalog
from mintpipe.uploader.pipeline import BatchUploadPipeline, PartialUploadFailure


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Catalog upload and randomized mint commands."""
    config = Settings()
    configure_logging(
        level=log_level or config.LOG_LEVEL, json_logs=config.JSON_LOGS
    )
    ctx.obj = config


@cli.command()
@click.argument(
    "folder",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option("--concurrency", type=click.IntRange(min=1), default=None, help="Max uploads in flight")
@click.option("--retries", type=click.IntRange(min=0), default=None, help="Retries per upload")
@click.option("--description", default=None, help="Description for every metadata document")
@click.option(
    "--backend",
    type=click.Choice(["pinata", "memory"]),
    default=None,
    help="Content store backend",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the catalog references to this JSON file",
)
@click.pass_obj
def upload(
    config: Settings,
    folder: Path | None,
    concurrency: int | None,
    retries: int | None,
    description: str | None,
    backend: str | None,
    output: Path | None,
) -> None:
    """Upload the assets in FOLDER and their metadata documents."""
    overrides: dict[str, Any] = {}
    if concurrency is not None:
        overrides["UPLOAD_CONCURRENCY"] = concurrency
    if retries is not None:
        overrides["UPLOAD_RETRIES"] = retries
    if backend is not None:
        overrides["CONTENT_STORE_BACKEND"] = backend
    if overrides:
        config = config.model_copy(update=overrides)

    store = create_content_store(config)
    if store is None:
        raise click.ClickException(
            "Content store not configured. Set PINATA_API_KEY and PINATA_API_SECRET "
            "or use --backend memory"
        )

    builder = metadata_builder_for(description or config.METADATA_DESCRIPTION)
    source = folder or Path(config.IMAGES_LOCATION)
    pipeline = BatchUploadPipeline.from_settings(store, config)

    try:
        catalog = asyncio.run(_upload(pipeline, store, source, builder))
    except PartialUploadFailure as e:
        for index in e.failed_indices:
            click.echo(f"  failed [{index}]: {e.errors[index]}", err=True)
        raise click.ClickException(str(e))
    except (FileNotFoundError, NotADirectoryError) as e:
        raise click.ClickException(str(e))

    for index, reference in enumerate(catalog):
        click.echo(f"{index}\t{reference}")

    if output is not None:
        output.write_text(json.dumps(catalog.to_strings(), indent=2))
        click.echo(f"Catalog written to {output}")


async def _upload(
    pipeline: BatchUploadPipeline,
    store: ContentStore,
    folder: Path,
    builder: Any,
) -> MintableCatalog:
    try:
        return await pipeline.upload_folder(folder, builder)
    finally:
        await store.aclose()


@cli.command()
@click.argument("catalog_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--requester", required=True, help="Requester identity")
@click.option("--stake", type=float, required=True, help="Stake supplied with the request")
@click.option(
    "--random-value",
    type=click.IntRange(min=0),
    default=None,
    help="Deliver this value instead of a random one",
)
@click.pass_obj
def mint(
    config: Settings,
    catalog_file: Path,
    requester: str,
    stake: float,
    random_value: int | None,
) -> None:
    """Request randomness and fulfill it locally against CATALOG_FILE."""
    try:
        values = json.loads(catalog_file.read_text())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Catalog file is not valid JSON: {e}")
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise click.ClickException("Catalog file must contain a JSON list of references")

    try:
        coordinator = RandomnessCoordinator.from_settings(
            config, catalog=MintableCatalog.from_strings(values)
        )
        oracle = LocalRandomnessOracle(coordinator)
        token = coordinator.request_randomness(requester, stake)
        click.echo(f"Request issued: {token}")
        result = oracle.fulfill(token, random_value)
    except (CoordinatorError, ValueError) as e:
        raise click.ClickException(str(e))

    click.echo(f"Selected index {result.selected_index}: {result.reference}")
    click.echo(f"Token id: {result.token_id}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
