"""CLI commands for inspecting the CMS and mirroring its images."""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass

import click

from resilient_cms import __version__
from resilient_cms.config import (
    BackendConfig,
    RuntimeMode,
    log_configuration_status,
    resolve_backend_config,
)
from resilient_cms.config.constants import COMPONENT_CLI
from resilient_cms.content import ContentEntity, Homepage, MenuItem
from resilient_cms.fetch import CmsClient
from resilient_cms.media import ImageCache
from resilient_cms.observability.logging import (
    bind_command_context,
    clear_command_context,
    configure_logging,
    get_logger,
)
from resilient_cms.observability.metrics import CmsMetrics


@dataclass
class CliOptions:
    """Options shared by all commands."""

    json_logs: bool
    verbose: bool


def _load_config(options: CliOptions, force_production: bool = False) -> BackendConfig:
    """Set up logging and resolve the backend configuration."""
    log_level = logging.DEBUG if options.verbose else logging.INFO
    configure_logging(level=log_level, json_format=options.json_logs)
    config = resolve_backend_config()
    if options.verbose and config.debug is None:
        config = config.model_copy(update={"debug": True})
    if force_production:
        config = config.model_copy(update={"mode": RuntimeMode.PRODUCTION})

    ctx = click.get_current_context()
    bind_command_context(command=ctx.info_name or "", mode=config.mode.value)
    ctx.call_on_close(clear_command_context)

    log_configuration_status(config)
    return config


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--json-logs/--no-json-logs",
    default=False,
    help="Use JSON format for logs (default: false).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging and full failure detail.",
)
@click.pass_context
def cli(ctx: click.Context, json_logs: bool, verbose: bool) -> None:
    """Resilient CMS client CLI."""
    ctx.obj = CliOptions(json_logs=json_logs, verbose=verbose)


@cli.command()
@click.pass_obj
def status(options: CliOptions) -> None:
    """Show whether a CMS backend is configured."""
    config = _load_config(options)
    summary = config.summary()

    if config.is_configured:
        click.echo(f"CMS configured: {summary['base_url']}")
    else:
        click.echo("CMS not configured - pages will use fallback content")
    click.echo(f"  Mode: {summary['mode']}")
    click.echo(f"  Token: {'set' if summary['has_token'] else 'not set'}")
    click.echo(f"  Verbose: {summary['verbose']}")
    click.echo(f"  Uploads: {summary['uploads_dir']} ({summary['image_naming']})")


@cli.command()
@click.argument("endpoint")
@click.option(
    "--single",
    is_flag=True,
    help="Treat ENDPOINT as a single type (e.g. homepage).",
)
@click.option(
    "--generic",
    is_flag=True,
    help="Validate entities with untyped attributes instead of menu items.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 when fallback content is returned.",
)
@click.pass_obj
def fetch(
    options: CliOptions,
    endpoint: str,
    single: bool,
    generic: bool,
    strict: bool,
) -> None:
    """Fetch ENDPOINT and print the result as JSON."""
    config = _load_config(options)
    client = CmsClient(config)
    log = get_logger(COMPONENT_CLI).bind(endpoint=endpoint)
    metrics = CmsMetrics.get_instance()
    fallbacks_before = metrics.fallback_count

    if single:
        document_model = ContentEntity if generic else Homepage
        single_result = asyncio.run(client.fetch_single(endpoint, document_model))
        payload = single_result.model_dump(mode="json")
    else:
        entity_model = ContentEntity if generic else MenuItem
        collection = asyncio.run(client.fetch_collection(endpoint, entity_model))
        payload = collection.model_dump(mode="json")

    fell_back = metrics.fallback_count > fallbacks_before

    click.echo(json.dumps(payload, indent=2, sort_keys=True))
    log.debug("fetch_command_complete", fallback=fell_back)

    if strict and fell_back:
        click.echo(f"Fallback content returned for {endpoint}", err=True)
        sys.exit(1)


@cli.command("mirror-images")
@click.argument("endpoints", nargs=-1)
@click.option(
    "--homepage",
    "homepage_endpoint",
    default=None,
    help="Also mirror the hero image of this single-type endpoint.",
)
@click.option(
    "--production",
    is_flag=True,
    help="Force production mode so images are written locally.",
)
@click.pass_obj
def mirror_images(
    options: CliOptions,
    endpoints: tuple[str, ...],
    homepage_endpoint: str | None,
    production: bool,
) -> None:
    """Download images referenced by ENDPOINTS into the uploads directory.

    ENDPOINTS default to ``menu-items``. Outside production mode images are
    only resolved, not downloaded.
    """
    config = _load_config(options, force_production=production)

    mapping = asyncio.run(
        _mirror(config, endpoints or ("menu-items",), homepage_endpoint)
    )

    for source, cached in mapping:
        click.echo(f"{source} -> {cached}")

    metrics = CmsMetrics.get_instance()
    click.echo(
        f"Images: {metrics.images_cached_total} cached, "
        f"{metrics.images_reused_total} reused, "
        f"{metrics.image_fallbacks_total} fell back to remote"
    )


async def _mirror(
    config: BackendConfig,
    endpoints: tuple[str, ...],
    homepage_endpoint: str | None,
) -> list[tuple[str, str | None]]:
    """Fetch entities and run their image URLs through the cache.

    Returns:
        (source path, cached path) pairs in fetch order.
    """
    client = CmsClient(config)
    cache = ImageCache(config)
    sources: list[str] = []

    for endpoint in endpoints:
        result = await client.fetch_collection(endpoint, MenuItem)
        sources.extend(item.image_url for item in result.items if item.image_url)

    if homepage_endpoint:
        homepage = await client.fetch_single(homepage_endpoint, Homepage)
        if homepage.value is not None and homepage.value.hero_image_url:
            sources.append(homepage.value.hero_image_url)

    cached = await cache.cache_images(list(sources))
    return list(zip(sources, cached, strict=True))
