"""CLI for browsing browser compatibility data."""

import logging
from concurrent.futures import ThreadPoolExecutor

import click
import httpx
from dotenv import load_dotenv
from ghcontents import StatusError

from .config import Config, app_config
from .downloader import DataDownloader
from .labels import derive_label
from .models import Item, ItemType
from .search import search_items, trail

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def item_for_path(config: Config, path: str) -> Item:
    """Build the item a descent chain would have produced for ``path``."""
    segments = [s for s in path.strip("/").split("/") if s]
    if not segments:
        raise click.BadParameter("path is empty", param_hint="PATH")
    item = Item(
        name=segments[0],
        url=config.content_url(segments[0]),
        type=ItemType.DIRECTORY,
        breadcrumbs=(segments[0],),
    )
    for depth in range(1, len(segments)):
        label = derive_label(segments[depth], config.label_pattern)
        item = Item(
            name=label,
            url=config.content_url("/".join(segments[: depth + 1])),
            type=ItemType.DIRECTORY,
            parent=item,
            root_parent=item.root_parent or item,
            breadcrumbs=item.breadcrumbs + (label,),
        )
    return item


def format_item(item: Item, indent: int = 0) -> str:
    """One output line for an item."""
    line = f"{'  ' * indent}{item.name}"
    if item.type is ItemType.FILE and item.url:
        line += f"  <{item.url}>"
    return line


def run_download(fn, *args):
    """Call a downloader operation, turning its errors into CLI errors."""
    try:
        return fn(*args)
    except StatusError as e:
        raise click.ClickException(f"{e.url}: {e}") from e
    except (ValueError, httpx.HTTPError) as e:
        raise click.ClickException(str(e)) from e


# ============ CLI Group ============

@click.group()
@click.option("--token", envvar="GITHUB_TOKEN", help="GitHub token")
@click.option("--use-gh-cli", is_flag=True, help="Use gh cli credentials")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
@click.pass_context
def cli(ctx: click.Context, token: str | None, use_gh_cli: bool, verbose: int) -> None:
    """Browser compatibility data tree CLI."""
    load_dotenv()
    setup_logging(verbose)
    ctx.ensure_object(dict)
    if "downloader" not in ctx.obj:
        ctx.obj["downloader"] = DataDownloader(app_config(token=token, use_gh_cli=use_gh_cli))


@cli.command()
@click.argument("path", required=False)
@click.pass_context
def ls(ctx, path):
    """List one level of the tree (root when PATH is omitted)."""
    downloader: DataDownloader = ctx.obj["downloader"]
    parent = item_for_path(downloader.config, path) if path else None
    children = run_download(downloader.download_tree_data, parent)

    if parent is not None:
        click.echo(downloader.config.higher_level_label)
    for child in children:
        click.echo(f"{format_item(child)}\t[{trail(child)}]")


@cli.command()
@click.argument("path", required=False)
@click.option("-d", "--depth", type=click.IntRange(min=1), default=2, show_default=True)
@click.option("-j", "--concurrency", type=int, default=DEFAULT_CONCURRENCY, show_default=True)
@click.pass_context
def walk(ctx, path, depth, concurrency):
    """Descend the tree level by level, fetching siblings in parallel."""
    downloader: DataDownloader = ctx.obj["downloader"]
    parent = item_for_path(downloader.config, path) if path else None
    children: dict[Item | None, list[Item]] = {}

    level = [parent]
    with ThreadPoolExecutor(max_workers=concurrency) as pool:
        for current in range(depth):
            logger.info("Walking level %d (%d nodes)", current + 1, len(level))
            results = pool.map(lambda node: run_download(downloader.download_tree_data, node), level)
            next_level = []
            for node, kids in zip(level, results):
                children[node] = kids
                next_level.extend(k for k in kids if k.type is ItemType.DIRECTORY)
            level = next_level
            if not level:
                break

    def show(node: Item | None, indent: int) -> None:
        for kid in children.get(node, []):
            click.echo(format_item(kid, indent))
            show(kid, indent + 1)

    show(parent, 0)


@cli.command()
@click.argument("query")
@click.option("-n", "--limit", type=int, default=50, show_default=True)
@click.pass_context
def search(ctx, query, limit):
    """Search the flat index by name or breadcrumbs."""
    downloader: DataDownloader = ctx.obj["downloader"]
    items = run_download(downloader.download_flat_data)
    matches = search_items(items, query)

    click.echo(f"Found {len(matches)} match(es)")
    for item in matches[:limit]:
        click.echo(f"  {trail(item)}  <{item.url}>")
    if not matches:
        click.echo(f"Try: {downloader.config.search_url}{query}")


if __name__ == "__main__":
    cli()
