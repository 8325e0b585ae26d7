from collections.abc import Iterator
from pathlib import Path
from typing import Optional

import httpx
import typer
from lxml import etree
from rich.console import Console
from rich.table import Table

from blogport.core.assembly import post_slug
from blogport.core.config import BlogportConfig
from blogport.core.exceptions import BlogportError
from blogport.core.logging_setup import configure_logging
from blogport.core.types import PostRecord
from blogport.core.utils import propose_filename
from blogport.features.migrate import MigrationReport, migrate
from blogport.infra.adapters.blogger import BloggerFeedAdapter, iter_posts
from blogport.infra.sinks.hugo import DryRunSink, HugoOutputSink

app = typer.Typer(name="blogport", help="Convert a Blogger export into Hugo posts.")

console = Console()


def _read_records(adapter: BloggerFeedAdapter, source: str) -> Iterator[PostRecord]:
    if source.startswith(("http://", "https://")):
        return adapter.parse_url(source)
    return adapter.parse(Path(source))


def _report_table(report: MigrationReport, dry_run: bool) -> Table:
    table = Table(title="Dry run" if dry_run else "Conversion report")
    table.add_column("Check", style="bold cyan")
    table.add_column("Count", justify="right")

    table.add_row("Posts registered", str(report.registered))
    table.add_row("Files " + ("planned" if dry_run else "written"), str(len(report.written)))
    table.add_row("Unresolved internal links", str(report.unresolved_links))
    table.add_row("Unhandled span styles", str(report.unhandled_styles))
    table.add_row("Unhandled elements", str(report.unhandled_markup))
    return table


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level. Defaults to BLOGPORT_LOG_LEVEL, then INFO."
    ),
):
    """
    Convert a Blogger export into Hugo posts.
    """
    configure_logging(log_level)


@app.command()
def convert(
    source: str = typer.Argument(..., help="Path or URL of the Blogger export."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory for the Markdown files."),
    site_root: Optional[Path] = typer.Option(None, "--site-root", help="Hugo site holding .blogport.toml."),
    draft: Optional[bool] = typer.Option(None, "--draft/--no-draft", help="Mark converted posts as drafts."),
    banner_file: Optional[Path] = typer.Option(None, "--banner-file", help="Markdown prepended to every post."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Convert only the N oldest posts."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Convert without writing files."),
):
    """
    Convert every post of SOURCE into a Hugo Markdown file.
    """
    config = BlogportConfig.load(site_root)
    if banner_file is not None:
        config.render.banner_file = banner_file
    output_dir = output if output is not None else config.paths.abs_output_dir
    sink = DryRunSink(output_dir) if dry_run else HugoOutputSink(output_dir)

    try:
        with BloggerFeedAdapter() as adapter:
            records = list(_read_records(adapter, source))
        report = migrate(
            records,
            sink,
            config,
            banner=config.read_banner(),
            draft=draft,
            limit=limit,
        )
    except (BlogportError, FileNotFoundError, httpx.HTTPError, etree.XMLSyntaxError) as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(_report_table(report, dry_run))
    if not dry_run:
        console.print(f"\n[bold green]Done![/bold green] Posts written to {output_dir}")


@app.command()
def inspect(
    source: str = typer.Argument(..., help="Path or URL of the Blogger export."),
    site_root: Optional[Path] = typer.Option(None, "--site-root", help="Hugo site holding .blogport.toml."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Show only the N oldest posts."),
):
    """
    List the posts of SOURCE with their slug and target filename.
    """
    config = BlogportConfig.load(site_root)
    try:
        with BloggerFeedAdapter() as adapter:
            posts = list(iter_posts(_read_records(adapter, source), config.blog.post_kind_suffix))
    except (FileNotFoundError, httpx.HTTPError, etree.XMLSyntaxError) as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(code=1) from exc

    posts.reverse()
    if limit is not None:
        posts = posts[:limit]

    table = Table(title=f"{len(posts)} posts")
    table.add_column("Published", style="dim")
    table.add_column("Slug", style="cyan")
    table.add_column("File", style="green")
    for record in posts:
        try:
            filename = propose_filename(record.title, record.published)
        except BlogportError as exc:
            filename = f"[red]{exc}[/red]"
        table.add_row(record.published, post_slug(record, config.blog.domain_aliases), filename)

    console.print(table)


if __name__ == "__main__":
    app()
