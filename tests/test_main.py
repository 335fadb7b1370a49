import io
import json
from pathlib import Path

import pytest

from keyhunt import __version__
from keyhunt.main import ProgressLine, main


@pytest.fixture
def project(write_json, write_file, tmp_path: Path) -> Path:
    write_json(
        "locales/en.json",
        {
            "hello": {"world": "Hello"},
            "status": {"open": "Open", "closed": "Closed"},
            "unused": {"one": "1", "two": "2"},
        },
    )
    write_file("src/app.ts", "t('hello.world');\nconst label = t(`status.${s}`);\n")
    write_file("src/app.test.ts", "t('unused.one')\n")
    return tmp_path


def _run(project: Path, *args: str) -> int:
    return main([str(project / "locales"), "--dir", str(project / "src"), *args])


def test_default_output_is_count(project: Path, capsys) -> None:
    assert _run(project) == 0

    out = capsys.readouterr().out
    assert out.strip() == "⚠️ 2 unused translation keys"


def test_keys_flag_lists_sorted_keys(project: Path, capsys) -> None:
    assert _run(project, "--keys") == 0

    out = capsys.readouterr().out
    assert "- unused.one\n- unused.two\n" in out
    assert "2 unused translation keys" in out


def test_stats_flag(project: Path, capsys) -> None:
    assert _run(project, "--stats") == 0

    out = capsys.readouterr().out
    assert "Files scanned: 1" in out
    assert "Keys checked: 5" in out
    assert "Keys not used: 2" in out
    assert "Time spent: " in out


def test_validate_fails_when_unused_keys_exist(project: Path, capsys) -> None:
    assert _run(project, "--validate") == 1
    assert "✗ 2 unused translation keys found" in capsys.readouterr().out


def test_validate_passes_on_clean_catalog(write_json, write_file, tmp_path: Path, capsys) -> None:
    write_json("en.json", {"only": {"key": "K"}})
    write_file("src/a.ts", "t('only.key')")

    assert main([str(tmp_path / "en.json"), "-d", str(tmp_path / "src"), "--validate"]) == 0
    assert "No unused translation keys found" in capsys.readouterr().out


def test_clear_removes_unused_keys(project: Path, capsys) -> None:
    assert _run(project, "--clear", "--stats") == 0

    out = capsys.readouterr().out
    assert "✓ 2 unused translation keys removed from translation files" in out
    assert "Keys not used" not in out

    catalog = json.loads((project / "locales" / "en.json").read_text(encoding="utf-8"))
    assert catalog == {
        "hello": {"world": "Hello"},
        "status": {"open": "Open", "closed": "Closed"},
    }


def test_report_json(project: Path, capsys) -> None:
    report_path = project / "out" / "report.json"

    assert _run(project, "--report-json", str(report_path)) == 0

    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["unused_keys"] == ["unused.one", "unused.two"]
    assert report["stats"]["keys_total"] == 5
    assert report["cleared"] is False


def test_extension_and_ignore_flags(project: Path, write_file, capsys) -> None:
    write_file("src/page.vue", "t('unused.two')")
    write_file("src/gen/page.vue", "t('unused.one')")

    assert _run(project, "--ext", "vue", "--ext", "ts", "--ignore", "gen/", "--keys") == 0

    out = capsys.readouterr().out
    assert "- unused.one\n" in out
    assert "- unused.two" not in out


def test_missing_catalog_is_an_error(tmp_path: Path, capsys) -> None:
    assert main([str(tmp_path / "missing.json")]) == 1

    err = capsys.readouterr().err
    assert "Error: Path does not exist" in err
    assert "hunt <translation_path> --dir src" in err


def test_no_arguments_prints_help(capsys) -> None:
    assert main([]) == 2
    assert "usage: hunt" in capsys.readouterr().err


def test_defaults_to_current_directory(project: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(project / "src")

    assert main([str(project / "locales"), "--keys"]) == 0
    assert "- unused.two" in capsys.readouterr().out


def test_debug_log_level_runs_and_logs_to_stderr(project: Path, capsys) -> None:
    assert _run(project, "--log-level", "DEBUG") == 0

    captured = capsys.readouterr()
    assert captured.out.strip() == "⚠️ 2 unused translation keys"
    assert "event_key=logging_configured" in captured.err
    assert "log_level=DEBUG" in captured.err
    assert "event_key=hunt_finished" in captured.err


def test_unwritable_report_is_an_error(project: Path, capsys) -> None:
    report_dir = project / "out"
    report_dir.mkdir()

    assert _run(project, "--report-json", str(report_dir)) == 1
    assert "Error: Failed to write report" in capsys.readouterr().err


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])

    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip() == f"keyhunt {__version__}"


def test_progress_line_redraws_and_clears() -> None:
    stream = io.StringIO()
    progress = ProgressLine(stream=stream, message="hunting")

    progress(10, 10, "a.ts")
    progress(9, 10, "b.ts")
    progress.clear()

    assert stream.getvalue() == (
        "\rhunting 10/10"
        "\rhunting 9/10 "
        "\r" + " " * len("hunting 10/10") + "\r"
    )


def test_progress_line_clear_without_output_writes_nothing() -> None:
    stream = io.StringIO()

    ProgressLine(stream=stream).clear()

    assert stream.getvalue() == ""
