"""Entrypoint for the command line interface."""

import json
import logging
import pathlib
from typing import Any, Optional

import typer

from searchindex.config_logging import configure_logging
from searchindex.configs import settings
from searchindex.index import SearchIndex
from searchindex.models import Document

logger = logging.getLogger(__name__)

cli = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Commands for managing and querying an Elasticsearch index",
)

# Shared options
host_option = typer.Option(
    settings.elasticsearch.host, "--host", help="Base URL of the Elasticsearch cluster"
)

index_option = typer.Option(
    settings.elasticsearch.index_name, "--index", help="Name of the index to operate on"
)

timeout_option = typer.Option(
    settings.elasticsearch.request_timeout_sec,
    "--timeout",
    help="Timeout of every request in seconds",
)

limit_option = typer.Option(None, "--limit", help="Maximum number of documents to return")

offset_option = typer.Option(0, "--offset", help="Number of documents to skip")

raw_option = typer.Option(False, "--raw", help="Print the response of Elasticsearch as-is")


def load_documents(path: pathlib.Path) -> list[Document]:
    """Load documents from a file holding a JSON array or one JSON object per line."""
    text = path.read_text(encoding="utf-8").strip()
    if text.startswith("["):
        documents = json.loads(text)
    else:
        documents = [json.loads(line) for line in text.splitlines() if line.strip()]
    if not all(isinstance(document, dict) for document in documents):
        raise typer.BadParameter(f"{path} must contain JSON objects only")
    return documents


def _index(ctx: typer.Context) -> SearchIndex:
    return ctx.obj


def _echo_json(value: Any) -> None:
    typer.echo(json.dumps(value, indent=2, ensure_ascii=False))


def _succeed_or_exit(ctx: typer.Context, result: Any) -> Any:
    """Exit with an error when an index operation reported a failure."""
    if result is None or result is False:
        typer.echo(f"Error: {_index(ctx).error or 'operation failed'}", err=True)
        raise typer.Exit(code=1)
    return result


@cli.callback()
def setup(
    ctx: typer.Context,
    host: str = host_option,
    index: str = index_option,
    timeout: float = timeout_option,
):
    """CLI Entrypoint"""
    configure_logging()
    search_index = SearchIndex(index_name=index, host=host, request_timeout=timeout)
    ctx.obj = search_index
    ctx.call_on_close(search_index.close)


@cli.command()
def exists(ctx: typer.Context):
    """Check whether the index exists"""
    _succeed_or_exit(ctx, _index(ctx).is_index_exists())
    typer.echo(f"Index {_index(ctx).index_name} exists")


@cli.command()
def list_indexes(ctx: typer.Context):
    """List all indices of the cluster"""
    typer.echo(_succeed_or_exit(ctx, _index(ctx).show_indexes_list()))


@cli.command()
def create_index(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(
        None, "--config", exists=True, dir_okay=False, help="JSON file with index settings"
    ),
):
    """Create the index"""
    search_index = _index(ctx)
    if config is not None:
        search_index.config_json = config.read_text(encoding="utf-8")
    _succeed_or_exit(ctx, search_index.create_index())
    typer.echo(f"Created index {search_index.index_name}")


@cli.command()
def delete_index(ctx: typer.Context):
    """Delete the index"""
    _succeed_or_exit(ctx, _index(ctx).delete_index())
    typer.echo(f"Deleted index {_index(ctx).index_name}")


@cli.command()
def get(ctx: typer.Context, doc_id: str = typer.Argument(..., help="Document id")):
    """Print a document by its id"""
    _echo_json(_succeed_or_exit(ctx, _index(ctx).get_document_by_id(doc_id)))


@cli.command()
def put(
    ctx: typer.Context,
    path: pathlib.Path = typer.Argument(..., exists=True, dir_okay=False),
):
    """Create or update the documents of a file one request at a time"""
    search_index = _index(ctx)
    documents = load_documents(path)
    for document in documents:
        _succeed_or_exit(ctx, search_index.create_or_update_document(document))
    typer.echo(f"Wrote {len(documents)} document(s)")


@cli.command()
def bulk(
    ctx: typer.Context,
    path: pathlib.Path = typer.Argument(..., exists=True, dir_okay=False),
):
    """Create the documents of a file in a single Bulk API request"""
    documents = load_documents(path)
    _succeed_or_exit(ctx, _index(ctx).create_documents(documents))
    logger.info("Bulk indexed documents", extra={"count": len(documents), "path": str(path)})
    typer.echo(f"Wrote {len(documents)} document(s)")


@cli.command()
def delete(ctx: typer.Context, doc_id: str = typer.Argument(..., help="Document id")):
    """Delete a document by its id"""
    _succeed_or_exit(ctx, _index(ctx).delete_document(doc_id))
    typer.echo(f"Deleted document {doc_id}")


@cli.command()
def search(
    ctx: typer.Context,
    query: Optional[str] = typer.Argument(None, help="DSL query as a JSON string"),
    keywords: str = typer.Option("", "--keywords", help="Keywords for a simple search"),
    field: str = typer.Option("", "--field", help="Field searched by --keywords"),
    limit: Optional[int] = limit_option,
    offset: int = offset_option,
    raw: bool = raw_option,
):
    """Search the index with a DSL query or with keywords"""
    search_index = _index(ctx)
    if query is not None:
        result = search_index.search_raw(query) if raw else search_index.search(query)
    elif keywords and not field:
        raise typer.BadParameter("--field is required with --keywords")
    elif raw:
        result = search_index.search_simple_raw(keywords, field, limit, offset)
    else:
        result = search_index.search_simple(keywords, field, limit, offset)

    result = _succeed_or_exit(ctx, result)
    if raw:
        typer.echo(result)
    else:
        _echo_json(result.model_dump())


@cli.command()
def count(
    ctx: typer.Context,
    query: Optional[str] = typer.Argument(None, help="DSL query as a JSON string"),
):
    """Count the documents matching a DSL query, or all documents"""
    search_index = _index(ctx)
    total = (
        search_index.count(query) if query is not None else search_index.get_all_documents_count()
    )
    typer.echo(_succeed_or_exit(ctx, total))


@cli.command()
def analyze(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Analyze request as a JSON string"),
    index_name: Optional[str] = typer.Option(
        None, "--index-name", help="Use the analyzers of this index"
    ),
):
    """Print the tokens produced by the Analyze API"""
    _echo_json(_succeed_or_exit(ctx, _index(ctx).analyze(query, index_name)))


if __name__ == "__main__":
    cli()
