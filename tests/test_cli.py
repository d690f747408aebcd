"""CLI tests for resource lookup."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from resfind.cli import Options, _apply_config, _parse_args, main  # pyright: ignore[reportPrivateUsage]
from resfind.config import ResfindConfig
from resfind.finder import DEFAULT_EXTENSIONS, SearchMethod


def _make_tree(root: Path) -> None:
    """Create a small project tree with an idempotent directory."""
    files = {
        "foo/one/one.py": 3_000,
        "foo/one/helper.py": 9_000,
        "foo/two.py": 2_000,
        "bar.py": 1_000,
        "notes.txt": 5_000,
    }
    for rel, mtime in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("pass\n")
        os.utime(path, (mtime, mtime))
    cached = root / "__pycache__" / "stale.py"
    cached.parent.mkdir()
    cached.write_text("pass\n")


def _lines(out: str) -> list[str]:
    return [line for line in out.split("\n") if line]


def _render_help(capsys: pytest.CaptureFixture[str]) -> str:
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    return capsys.readouterr().out


def test_help_includes_common_usage(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "resfind: Find project resources by exact, partial or wildcard name" in out
    assert "Common usage:" in out
    assert "resfind --exists foo/one" in out


def test_list_all_newest_first(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert _lines(capsys.readouterr().out) == ["foo/one", "foo/two", "bar"]


def test_list_all_listing_order(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--no-mtime"]) == 0
    assert _lines(capsys.readouterr().out) == ["bar", "foo/two", "foo/one"]


def test_wildcard_search_with_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["-r", str(tmp_path), "fone"]) == 0
    assert _lines(capsys.readouterr().out) == ["foo/one"]


def test_partial_search_with_base(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["-r", str(tmp_path), "-m", "partial", "-b", "foo", "wo"]) == 0
    assert _lines(capsys.readouterr().out) == ["foo/two"]


def test_no_match_prints_nothing(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["-r", str(tmp_path), "helper", "-m", "partial"]) == 0
    assert capsys.readouterr().out == ""


def test_exists(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["-r", str(tmp_path), "--exists", "foo/one"]) == 0
    assert main(["-r", str(tmp_path), "--exists", "foo/one/helper"]) == 1
    assert capsys.readouterr().out == ""


def test_paths(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["-r", str(tmp_path), "--paths", "-m", "exact", "foo/one"]) == 0
    out = capsys.readouterr().out
    assert out == f"foo/one\t{Path('foo/one/one.py')}\n"


def test_extension_flag(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["-r", str(tmp_path), "--extension", ".txt"]) == 0
    assert _lines(capsys.readouterr().out) == ["notes"]


def test_extend_exclude(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["-r", str(tmp_path), "--no-mtime", "--extend-exclude", "foo/"]) == 0
    assert _lines(capsys.readouterr().out) == ["bar"]


def test_exclude_replaces_defaults(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _make_tree(tmp_path)
    assert main(["-r", str(tmp_path), "-m", "partial", "--exclude", "foo/", "stale"]) == 0
    assert _lines(capsys.readouterr().out) == ["__pycache__/stale"]


def test_config_file_applies(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "resfind.toml").write_text('[search]\nmethod = "partial"\nby-mtime = false\n')
    monkeypatch.chdir(tmp_path)
    assert main(["o"]) == 0
    assert _lines(capsys.readouterr().out) == ["foo/two", "foo/one"]


def test_explicit_flag_beats_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "resfind.toml").write_text('[search]\nmethod = "partial"\n')
    monkeypatch.chdir(tmp_path)
    assert main(["-m", "wildcard", "o"]) == 0
    assert capsys.readouterr().out == ""


def test_invalid_method_in_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "resfind.toml").write_text('[search]\nmethod = "fuzzy"\n')
    monkeypatch.chdir(tmp_path)
    assert main(["foo"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: ")
    assert "resfind.toml: invalid value for 'method'" in captured.err
    assert "'fuzzy'" in captured.err


def test_invalid_method_flag_rejected(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["-m", "fuzzy", "foo"])
    assert exc.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_bad_config_value_exits_before_listing(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _make_tree(tmp_path)
    (tmp_path / "resfind.toml").write_text("[file-discovery]\nrespect-gitignore = \"no\"\n")
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "invalid value for 'respect-gitignore'" in captured.err


def test_default_extensions() -> None:
    options, explicit_flags = _parse_args([])
    assert options.extensions == DEFAULT_EXTENSIONS
    assert options.extensions is not DEFAULT_EXTENSIONS
    assert explicit_flags == set()


def test_explicit_flags_tracked() -> None:
    _, explicit_flags = _parse_args(["-m", "wildcard", "--no-mtime", "--extension", ".R"])
    assert explicit_flags == {"method", "by_mtime", "extensions"}


def _make_options() -> Options:
    options, _ = _parse_args([])
    return options


def test_apply_config_fills_defaults() -> None:
    options = _make_options()
    config = ResfindConfig(
        method=SearchMethod.partial,
        by_mtime=False,
        extensions=[".R"],
        extend_exclude=["vendor/"],
        respect_gitignore=False,
    )
    _apply_config(options, config, explicit_flags=set())
    assert options.method == "partial"
    assert options.by_mtime is False
    assert options.extensions == [".R"]
    assert options.extend_exclude == ["vendor/"]
    assert options.respect_gitignore is False
    assert options.exclude is None


def test_apply_config_explicit_flags_win() -> None:
    options, explicit_flags = _parse_args(["-m", "exact", "--extension", ".txt"])
    config = ResfindConfig(method=SearchMethod.partial, by_mtime=False, extensions=[".R"])
    _apply_config(options, config, explicit_flags)
    assert options.method == "exact"
    assert options.extensions == [".txt"]
    assert options.by_mtime is False


def test_apply_empty_config_changes_nothing() -> None:
    options = _make_options()
    _apply_config(options, ResfindConfig(), explicit_flags=set())
    assert options == _make_options()
