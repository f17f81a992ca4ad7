"""TokenKit CLI entry point."""
from __future__ import annotations

import json
import logging

import click

from tokenkit.errors import TokenKitError

catalog_option = click.option(
    "--catalog",
    default="models.data.json",
    envvar="TOKENKIT_CATALOG",
    show_default=True,
    help="Catalog JSON file",
)

default_engine_option = click.option(
    "--default-engine",
    default="simple",
    envvar="TOKENKIT_ENGINE",
    show_default=True,
    help="Engine used when none is named or the named one is unknown",
)


def _open_service(catalog: str, engine: str = "simple"):
    from tokenkit.catalog.store import CatalogStore
    from tokenkit.engines import create_default_registry
    from tokenkit.service import TokenKitService

    try:
        registry = create_default_registry(default=engine)
        store = CatalogStore.open(catalog)
    except TokenKitError as exc:
        raise click.ClickException(str(exc)) from exc
    return TokenKitService(store, engines=registry)


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    envvar="TOKENKIT_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """TokenKit: model catalog and token counting."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--host", default="127.0.0.1", envvar="TOKENKIT_HOST", help="Host to bind to")
@click.option("--port", default=5000, type=int, envvar="TOKENKIT_PORT", help="Port to bind to")
@catalog_option
@click.option("--engine", default="simple", envvar="TOKENKIT_ENGINE", help="Default engine")
@click.option(
    "--input-root",
    default=None,
    envvar="TOKENKIT_INPUT_ROOT",
    type=click.Path(exists=True, file_okay=False),
    help="Directory that FromFile inputs may be read from",
)
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def serve(
    host: str, port: int, catalog: str, engine: str, input_root: str | None, debug: bool
) -> None:
    """Start the TokenKit API server."""
    from tokenkit.catalog.store import CatalogStore
    from tokenkit.config import TokenKitConfig
    from tokenkit.engines import create_default_registry
    from tokenkit.service import TokenKitService
    from tokenkit.web.app import create_app

    config = TokenKitConfig(
        catalog_path=catalog,
        default_engine=engine,
        input_root=input_root,
        host=host,
        port=port,
    )
    try:
        store = CatalogStore.open(config.catalog_path)
        service = TokenKitService(
            store,
            engines=create_default_registry(default=config.default_engine),
            input_root=config.input_root,
        )
    except TokenKitError as exc:
        raise click.ClickException(str(exc)) from exc

    app = create_app(service=service, config=config)
    click.echo(f"Starting TokenKit on {host}:{port} ({len(store)} models)")
    try:
        app.run(host=host, port=port, debug=debug, threaded=True)
    finally:
        store.close()


@cli.command()
@catalog_option
@click.option("--provider", default=None, help="Filter by provider (substring)")
@click.option("--contains", default=None, help="Filter by id or provider (substring)")
def models(catalog: str, provider: str | None, contains: str | None) -> None:
    """List models in the catalog."""
    service = _open_service(catalog)
    found = service.get_models(provider=provider, contains=contains)
    for m in found:
        click.echo(f"{m.id}\t{m.provider}\t{m.max_tokens}")
    click.echo(f"{len(found)} models")


@cli.command()
@default_engine_option
def engines(default_engine: str) -> None:
    """List tokenization engines."""
    from tokenkit.engines import create_default_registry

    try:
        registry = create_default_registry(default=default_engine)
    except TokenKitError as exc:
        raise click.ClickException(str(exc)) from exc
    for name in registry.list_names():
        marker = " (default)" if name == registry.default_name else ""
        click.echo(f"{name}{marker}")


def _read_text(text: str | None, text_file: str | None) -> str:
    if text_file is not None:
        with open(text_file, encoding="utf-8") as fh:
            return fh.read()
    if text is None:
        raise click.UsageError("Provide TEXT or --file")
    return text


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "text_file", type=click.Path(exists=True, dir_okay=False), help="Read text from a file")
@click.option("--model", "model_id", required=True, help="Model id")
@click.option("--engine", default=None, help="Engine name")
@default_engine_option
@catalog_option
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def analyze(
    text: str | None,
    text_file: str | None,
    model_id: str,
    engine: str | None,
    default_engine: str,
    catalog: str,
    as_json: bool,
) -> None:
    """Count tokens and estimate cost for TEXT."""
    service = _open_service(catalog, default_engine)
    try:
        result = service.analyze(_read_text(text, text_file), model_id, engine)
    except TokenKitError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return
    click.echo(f"{result.token_count} tokens ({result.engine_used}, {result.model_id})")
    if result.estimated_input_cost is not None:
        click.echo(f"input cost:  ${result.estimated_input_cost:.6f}")
        click.echo(f"output cost: ${result.estimated_output_cost:.6f}")


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "text_file", type=click.Path(exists=True, dir_okay=False), help="Read text from a file")
@click.option("--model", "model_id", required=True, help="Model id")
@click.option("--engine", default=None, help="Engine name")
@default_engine_option
@catalog_option
def validate(
    text: str | None,
    text_file: str | None,
    model_id: str,
    engine: str | None,
    default_engine: str,
    catalog: str,
) -> None:
    """Check TEXT against a model's token budget. Exits 2 when over."""
    service = _open_service(catalog, default_engine)
    try:
        result = service.validate(_read_text(text, text_file), model_id, engine)
    except TokenKitError as exc:
        raise click.ClickException(str(exc)) from exc

    status = "OK" if result.within_limit else "OVER LIMIT"
    click.echo(f"{status}: {result.token_count}/{result.max_tokens} tokens ({result.engine_used})")
    if not result.within_limit:
        click.get_current_context().exit(2)


@cli.command("import")
@click.option(
    "--file",
    "models_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file of models",
)
@click.option("--replace/--merge", default=False, help="Replace the catalog instead of merging")
@catalog_option
def import_models(models_file: str, replace: bool, catalog: str) -> None:
    """Import models from a JSON file."""
    service = _open_service(catalog)
    with open(models_file, "rb") as fh:
        payload = fh.read()
    try:
        count = service.import_models(payload, replace=replace)
    except TokenKitError as exc:
        raise click.ClickException(str(exc)) from exc
    service.store.close()

    action = "Replaced catalog with" if replace else "Merged"
    click.echo(f"{action} {count} models ({len(service.store)} total)")
