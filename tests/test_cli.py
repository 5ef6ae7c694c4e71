#!/usr/bin/env python3
"""
Tests for the xliff-merge command line.

Checks the JSON report on stdout, the JSON error payload on stderr and
the exit codes.
"""

import json

import pytest

from xliffmerge import cli


def run_cli(argv, capsys):
    code = 0
    try:
        cli.main(argv)
    except SystemExit as e:
        code = e.code
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_merge_prints_report(locale_dir, capsys):
    code, out, _ = run_cli(["--path", str(locale_dir)], capsys)

    assert code == 0
    report = json.loads(out)
    assert report["status"] == "ok"
    assert report["translation"] is False
    assert [r["locale"] for r in report["locales"]] == ["en", "fr"]


def test_google_translate_without_key_is_fatal(locale_dir, capsys, monkeypatch):
    monkeypatch.delenv(cli.API_KEY_ENV, raising=False)

    code, out, err = run_cli(["--path", str(locale_dir), "--google-translate"], capsys)

    assert code == 1
    assert out == ""
    error = json.loads(err.strip().splitlines()[-1])
    assert error["status"] == "error"
    assert error["error_type"] == "ValueError"
    # nothing was rewritten
    assert "trgLang" not in (locale_dir / "messages.en.xlf").read_text(encoding="utf-8")


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv(cli.API_KEY_ENV, "from-env")

    args = cli.build_parser().parse_args([])

    assert args.api_key == "from-env"
    assert args.path == "angular/src/locale"
    assert args.google_translate is False


def test_missing_directory_is_fatal(tmp_path, capsys):
    code, _, err = run_cli(["--path", str(tmp_path / "missing")], capsys)

    assert code == 1
    assert json.loads(err.strip().splitlines()[-1])["error_type"] == "FileNotFoundError"


def test_partial_run_exits_non_zero(locale_dir, capsys):
    (locale_dir / "messages.es.xlf").write_text("<xliff", encoding="utf-8")

    code, out, err = run_cli(["--path", str(locale_dir)], capsys)

    assert code == 1
    assert json.loads(out)["status"] == "partial"


def test_fail_fast_aborts(locale_dir, capsys):
    (locale_dir / "messages.es.xlf").write_text("<xliff", encoding="utf-8")

    code, out, err = run_cli(["--path", str(locale_dir), "--fail-fast"], capsys)

    assert code == 1
    assert out == ""
    assert json.loads(err.strip().splitlines()[-1])["error_type"] == "CatalogError"


def test_locale_option_creates_file(locale_dir, capsys):
    code, _, _ = run_cli(["--path", str(locale_dir), "--locale", "ja"], capsys)

    assert code == 0
    assert (locale_dir / "messages.ja.xlf").exists()


@pytest.mark.parametrize("level", ["DEBUG", "WARNING"])
def test_log_level_option(level):
    assert cli.build_parser().parse_args(["--log-level", level]).log_level == level
