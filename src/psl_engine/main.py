from __future__ import annotations

from pathlib import Path

import click
import structlog

from .config import settings
from .cookiejar import PublicSuffixList
from .errors import InvalidDomainError, PSLError
from .logging_config import setup_logging
from .persistence import load, save
from .resolver import SuffixResolver
from .retriever import GitHubListRetriever, ListRetriever
from .store import RuleStore

log = structlog.get_logger()


def _get_retriever() -> ListRetriever:
    return GitHubListRetriever(
        commits_url=settings.commits_url,
        list_url_template=settings.list_url_template,
        timeout=settings.http_timeout,
    )


def _open_store(cache_path: Path) -> RuleStore:
    store = RuleStore()
    if cache_path.exists():
        try:
            store.replace(load(cache_path))
        except PSLError as e:
            log.warning("cache_load_failed", path=str(cache_path), error=str(e))
    return store


def _update(store: RuleStore, cache_path: Path) -> bool:
    updated = store.update(_get_retriever())
    if updated:
        save(store.current(), cache_path)
    return updated


@click.group()
@click.option("--cache", "cache_path", type=click.Path(path_type=Path), default=None,
              help="Persisted rule table (defaults to the configured cache_path).")
@click.pass_context
def cli(ctx: click.Context, cache_path: Path | None) -> None:
    """Public Suffix List lookups."""
    setup_logging(log_json=settings.log_json)
    cache_path = cache_path or Path(settings.cache_path)
    ctx.obj = {"cache_path": cache_path, "store": _open_store(cache_path)}


@cli.command()
@click.argument("domains", nargs=-1, required=True)
@click.pass_obj
def lookup(obj: dict, domains: tuple[str, ...]) -> None:
    """Print the public suffix and registrable domain of each DOMAIN."""
    store: RuleStore = obj["store"]
    if settings.update_on_start:
        try:
            _update(store, obj["cache_path"])
        except PSLError as e:
            log.error("update_failed", error=str(e))

    resolver = SuffixResolver(store)
    for domain in domains:
        suffix, icann, matched = resolver.resolve(domain)
        try:
            etld1 = resolver.registrable_domain(domain)
        except InvalidDomainError:
            etld1 = "-"
        click.echo(f"{domain}\tsuffix={suffix}\ticann={icann}\tmatched={matched}\tetld+1={etld1}")


@cli.command()
@click.pass_obj
def update(obj: dict) -> None:
    """Fetch the latest list and persist it."""
    try:
        updated = _update(obj["store"], obj["cache_path"])
    except PSLError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"{'updated to' if updated else 'already at'} release {obj['store'].release or '(none)'}")


@cli.command()
@click.pass_obj
def release(obj: dict) -> None:
    """Describe the active list release."""
    click.echo(str(PublicSuffixList(SuffixResolver(obj["store"]))))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
