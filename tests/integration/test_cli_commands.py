"""CLI integration tests for parse, normalize, render, and locales commands."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from loctext.cli import app


def test_parse_command_prints_indented_tree() -> None:
    """Parse should print the normalized tree one node per line."""

    runner = CliRunner()

    result = runner.invoke(app, ["parse", "Welcome $user, #greet.morning &a"])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "Composite",
        "  PlainText 'Welcome '",
        "  Variable user",
        "  PlainText ', '",
        "  Localizable greet.morning",
        "  PlainText ' '",
        "  Color green rgba=(85,255,85,1)",
    ]


def test_normalize_command_prints_canonical_form() -> None:
    """Normalize should merge plain runs and brace names only where needed."""

    runner = CliRunner()

    result = runner.invoke(app, ["normalize", "a${b}c ${d} &{l}x"])

    assert result.exit_code == 0, result.output
    assert result.output == "a${b}c $d &lx\n"


def test_render_command_resolves_catalog_entries(locales_dir: Path) -> None:
    """Render should resolve placeholders and `--arg` bindings against the catalog."""

    runner = CliRunner()
    args = [
        "render",
        "#message",
        "--catalog-dir",
        str(locales_dir),
        "--arg",
        "killer=ProPlayer",
        "--arg",
        "killed=Noob",
    ]

    english = runner.invoke(app, args)
    portuguese = runner.invoke(app, [*args, "--locale", "pt_br"])

    assert english.exit_code == 0, english.output
    assert "Player ProPlayer killed Noob." in english.output
    assert "[stage] level=INFO command=render stage=render event=complete" in english.output
    assert portuguese.exit_code == 0, portuguese.output
    assert "Jogador ProPlayer matou Noob." in portuguese.output


def test_render_command_parses_argument_templates(locales_dir: Path) -> None:
    """Argument values should be parsed as templates themselves."""

    runner = CliRunner()

    result = runner.invoke(
        app,
        [
            "render",
            "$count #players",
            "--catalog-dir",
            str(locales_dir),
            "--locale",
            "pt_br",
            "--arg",
            "count=#kill 5",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "mate 5 jogadores" in result.output


def test_render_command_without_catalog_uses_formatting_policy() -> None:
    """Render should work without a catalog and honor `--formatting`."""

    runner = CliRunner()

    codes = runner.invoke(app, ["render", "&aok #missing.path", "--formatting", "codes"])
    ansi = runner.invoke(app, ["render", "&aok", "--formatting", "ANSI"])

    assert codes.exit_code == 0, codes.output
    assert "&aok missing.path" in codes.output
    assert ansi.exit_code == 0, ansi.output
    assert "\x1b[38;2;85;255;85mok" in ansi.output


def test_render_command_reads_yaml_config(tmp_path: Path, locales_dir: Path) -> None:
    """Render should take catalog and locale settings from `--config`."""

    config_path = tmp_path / "loctext.yml"
    config_path.write_text(
        f"catalog_dir: {locales_dir.as_posix()}\nlocale: pt_br\nlog_level: error\n",
        encoding="utf-8",
    )
    runner = CliRunner()

    result = runner.invoke(app, ["render", "#kill", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "mate"


def test_render_command_reports_invalid_formatting() -> None:
    """An unknown formatting policy should fail at the config stage."""

    runner = CliRunner()

    result = runner.invoke(app, ["render", "text", "--formatting", "html"])

    assert result.exit_code == 1
    assert "render failed at stage `config`" in result.output
    assert "Hint: Use one of `strip`, `codes`, or `ansi`." in result.output


def test_render_command_reports_missing_catalog_dir(tmp_path: Path) -> None:
    """A missing catalog directory should fail at the catalog stage."""

    runner = CliRunner()

    result = runner.invoke(
        app, ["render", "#kill", "--catalog-dir", str(tmp_path / "missing")]
    )

    assert result.exit_code == 1
    assert "render failed at stage `catalog`" in result.output
    assert "[stage] level=ERROR command=render stage=catalog event=failure" in result.output


def test_render_command_reports_unknown_locale(locales_dir: Path) -> None:
    """A locale missing from the catalog should fail with a catalog hint."""

    runner = CliRunner()

    result = runner.invoke(
        app, ["render", "#kill", "--catalog-dir", str(locales_dir), "--locale", "fr_fr"]
    )

    assert result.exit_code == 1
    assert "Locale `fr_fr` is not registered." in result.output


def test_render_command_reports_malformed_argument() -> None:
    """Arguments without `=` should fail at the arguments stage."""

    runner = CliRunner()

    result = runner.invoke(app, ["render", "$a", "--arg", "novalue"])

    assert result.exit_code == 1
    assert "render failed at stage `arguments`" in result.output


def test_render_command_reports_missing_config_file(tmp_path: Path) -> None:
    """A missing `--config` path should fail with config diagnostics."""

    runner = CliRunner()

    result = runner.invoke(app, ["render", "x", "--config", str(tmp_path / "missing.yml")])

    assert result.exit_code == 1
    assert "render failed at stage `config`" in result.output
    assert "Config file not found" in result.output


def test_locales_command_lists_locales(locales_dir: Path) -> None:
    """Locales should print each locale with its path count."""

    runner = CliRunner()

    result = runner.invoke(app, ["locales", "--catalog-dir", str(locales_dir)])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["en_us: 7 paths", "pt_br: 5 paths"]


def test_locales_command_requires_catalog_dir() -> None:
    """Locales should fail when no catalog directory is configured."""

    runner = CliRunner()

    result = runner.invoke(app, ["locales"])

    assert result.exit_code == 1
    assert "locales failed at stage `config`" in result.output
