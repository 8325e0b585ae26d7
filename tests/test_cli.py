"""Tests for the blogport command line."""

import logging
from pathlib import Path

import pytest
from conftest import build_export, make_record
from rich.console import Console
from typer.testing import CliRunner

from blogport.cli import app as cli_module
from blogport.cli.app import app
from blogport.infra.adapters.blogger import BloggerFeedAdapter

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # Keep table cells on one line so assertions can match whole values.
    monkeypatch.setattr(cli_module, "console", Console(width=200))


def test_convert_writes_posts(export_file: Path, tmp_path: Path):
    output = tmp_path / "out"

    result = runner.invoke(app, ["convert", str(export_file), "--output", str(output), "--site-root", str(tmp_path)])

    assert result.exit_code == 0
    assert sorted(path.name for path in output.iterdir()) == [
        "201005032115_primera-entrada.md",
        "201006010800_segunda-entrada.md",
    ]
    assert "Done!" in result.stdout


def test_convert_uses_configured_output_dir(export_file: Path, tmp_path: Path):
    (tmp_path / ".blogport.toml").write_text('[paths]\noutput_dir = "site/posts"\n', encoding="utf-8")

    result = runner.invoke(app, ["convert", str(export_file), "--site-root", str(tmp_path)])

    assert result.exit_code == 0
    assert len(list((tmp_path / "site" / "posts").iterdir())) == 2


def test_convert_prepends_banner(export_file: Path, tmp_path: Path):
    banner = tmp_path / "banner.md"
    banner.write_text("> Imported\n", encoding="utf-8")
    output = tmp_path / "out"

    result = runner.invoke(
        app,
        ["convert", str(export_file), "-o", str(output), "--site-root", str(tmp_path), "--banner-file", str(banner), "--draft"],
    )

    assert result.exit_code == 0
    text = (output / "201005032115_primera-entrada.md").read_text(encoding="utf-8")
    assert "draft: true" in text
    assert "---\n\n> Imported\n" in text


def test_dry_run_writes_nothing(export_file: Path, tmp_path: Path):
    output = tmp_path / "out"

    result = runner.invoke(
        app, ["convert", str(export_file), "-o", str(output), "--site-root", str(tmp_path), "--dry-run"]
    )

    assert result.exit_code == 0
    assert "Dry run" in result.stdout
    assert not output.exists()


def test_missing_export_fails(tmp_path: Path):
    result = runner.invoke(app, ["convert", str(tmp_path / "missing.xml"), "--site-root", str(tmp_path)])

    assert result.exit_code == 1
    assert "Export file not found" in result.stdout


def test_duplicate_slug_fails_without_writing(tmp_path: Path):
    export = tmp_path / "export.xml"
    export.write_bytes(
        build_export(
            [
                make_record("2010/05/same.html", title="Two", published="2010-05-02T10:00:00.000+02:00"),
                make_record("2010/05/same.html", title="One", published="2010-05-01T10:00:00.000+02:00"),
            ]
        )
    )
    output = tmp_path / "out"

    result = runner.invoke(app, ["convert", str(export), "-o", str(output), "--site-root", str(tmp_path)])

    assert result.exit_code == 1
    assert "already registered" in result.stdout
    assert not output.exists()


def test_inspect_lists_posts_oldest_first(export_file: Path, tmp_path: Path):
    result = runner.invoke(app, ["inspect", str(export_file), "--site-root", str(tmp_path)])

    assert result.exit_code == 0
    assert "2 posts" in result.stdout
    first = result.stdout.index("201005032115_primera-entrada.md")
    second = result.stdout.index("201006010800_segunda-entrada.md")
    assert first < second
    assert "unomascero_blogspot_com-2010-05-primera-entrada_html" in result.stdout


def test_inspect_limit(export_file: Path, tmp_path: Path):
    result = runner.invoke(app, ["inspect", str(export_file), "--site-root", str(tmp_path), "--limit", "1"])

    assert result.exit_code == 0
    assert "1 posts" in result.stdout
    assert "segunda" not in result.stdout


def test_convert_reads_urls(mocker, tmp_path: Path):
    parse_url = mocker.patch.object(BloggerFeedAdapter, "parse_url", return_value=iter([make_record("a.html")]))
    parse = mocker.patch.object(BloggerFeedAdapter, "parse")
    url = "https://example.com/blog-export.xml"

    result = runner.invoke(app, ["convert", url, "--dry-run", "--site-root", str(tmp_path)])

    assert result.exit_code == 0
    parse_url.assert_called_once_with(url)
    parse.assert_not_called()


def test_malformed_export_fails(tmp_path: Path):
    export = tmp_path / "broken.xml"
    export.write_text("<feed><entry>", encoding="utf-8")

    result = runner.invoke(app, ["convert", str(export), "--site-root", str(tmp_path)])

    assert result.exit_code == 1
    assert "Error:" in result.stdout


@pytest.fixture
def root_level():
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


def test_log_level_comes_from_environment(export_file: Path, tmp_path: Path, root_level):
    result = runner.invoke(
        app, ["inspect", str(export_file), "--site-root", str(tmp_path)], env={"BLOGPORT_LOG_LEVEL": "DEBUG"}
    )

    assert result.exit_code == 0
    assert root_level.level == logging.DEBUG


def test_log_level_option_wins_over_environment(export_file: Path, tmp_path: Path, root_level):
    result = runner.invoke(
        app,
        ["--log-level", "WARNING", "inspect", str(export_file), "--site-root", str(tmp_path)],
        env={"BLOGPORT_LOG_LEVEL": "DEBUG"},
    )

    assert result.exit_code == 0
    assert root_level.level == logging.WARNING
