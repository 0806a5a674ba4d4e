"""Integration tests for the build and render commands"""

import json

from typer.testing import CliRunner

from cdnpub.cli.cli import app


runner = CliRunner()


def test_build_cmd_writes_versioned_tree(curated, tmp_path):
    """build writes the textbook tree and strips the 'v' from --version."""
    out = tmp_path / "cdn"
    result = runner.invoke(app, [
        "build",
        "--input-dir", str(curated),
        "--out-dir", str(out),
        "--version", "v20250822",
        "--checksum",
    ])

    assert result.exit_code == 0, result.output
    assert "textbook: 1 chapter(s), 1 section(s)" in result.output
    article = json.loads((out / "textbook" / "v20250822" / "M01" / "articles" / "M01L01.json").read_text())
    assert len(article["sha256"]) == 64


def test_build_cmd_reads_env(curated, tmp_path, monkeypatch):
    monkeypatch.setenv("CDNPUB_INPUT_DIR", str(curated))
    monkeypatch.setenv("CDNPUB_OUTPUT_DIR", str(tmp_path / "env-cdn"))
    monkeypatch.setenv("CDNPUB_VERSION", "5")
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "env-cdn" / "textbook" / "v5" / "index.json").exists()


def test_build_cmd_missing_index_exits_nonzero(tmp_path):
    result = runner.invoke(app, ["build", "--input-dir", str(tmp_path / "nowhere"), "--out-dir", str(tmp_path / "o")])
    assert result.exit_code == 1
    assert "Error: Missing textbook root index" in result.output


def test_build_cmd_bad_config_exits_nonzero(curated):
    result = runner.invoke(app, ["build", "--input-dir", str(curated), "--log-level", "chatty"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_render_cmd_prints_published_article(curated):
    path = curated / "textbook" / "articles" / "M01" / "M01L01.json"
    result = runner.invoke(app, ["render", str(path), "--chapter", "M01"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["sectionId"] == "M01L01"
    assert data["body_html"] == "<h1>Hi</h1>\n<p>Hello</p>"
    assert "sha256" not in data


def test_render_cmd_missing_file(tmp_path):
    result = runner.invoke(app, ["render", str(tmp_path / "x.json"), "--chapter", "M01"])
    assert result.exit_code == 1
    assert "Cannot read article x" in result.output
