from __future__ import annotations

import json
from pathlib import Path

import pytest

from versioncheck.cli import EXIT_ERROR, EXIT_FINDINGS, EXIT_OK, EXIT_UNSATISFIED, main


def test_parse(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", "1.2-rc.1+b7"]) == EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "version": "1.2.0-rc.1+b7",
        "segments": [1, 2, 0],
        "prerelease": "rc.1",
        "metadata": "b7",
    }


def test_parse_malformed(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", "1.2.beta"]) == EXIT_ERROR
    assert "ERROR: malformed version: 1.2.beta" in capsys.readouterr().err


def test_parse_rejects_oversized_segment(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", "9" * 5000]) == EXIT_ERROR
    assert "ERROR: malformed version" in capsys.readouterr().err


def test_compare(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["compare", "1.2.0-beta", "1.2.0"]) == EXIT_OK
    assert capsys.readouterr().out.strip() == "-1"


def test_sort(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["sort", "1.0", "0.7.1", "1.2.3", "2", "1.2.0-beta"]) == EXIT_OK
    assert capsys.readouterr().out.split() == ["0.7.1", "1.0.0", "1.2.0-beta", "1.2.3", "2.0.0"]


def test_check(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", "-c", ">= 1.0, < 2.0", "1.4.2"]) == EXIT_OK
    assert main(["check", "-c", ">= 1.0, < 2.0", "1.4.2", "2.0.0"]) == EXIT_UNSATISFIED
    out = capsys.readouterr().out
    assert "2.0.0\tunsatisfied" in out


def test_check_malformed_constraint(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["check", "-c", ">= 1.x", "1.0"]) == EXIT_ERROR
    assert "malformed constraint" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["bump", "minor", "1.2.3"], "1.3.0"),
        (["bump", "major", "1.2.3-rc.1"], "1.2.3"),
        (["bump", "patch", "1.2.3", "--prerelease", "rc.1", "--metadata", "sha.1f"], "1.2.4-rc.1+sha.1f"),
    ],
)
def test_bump(capsys: pytest.CaptureFixture[str], argv: list[str], expected: str) -> None:
    assert main(argv) == EXIT_OK
    assert capsys.readouterr().out.strip() == expected


def test_equals() -> None:
    assert main(["equals", ">0.1,>0.2", ">0.2"]) == EXIT_UNSATISFIED
    assert main(["equals", ">0.1,>0.2", ">0.2", "--logical"]) == EXIT_OK
    assert main(["equals", "<2, >1", ">1.0,<2.0"]) == EXIT_OK


def _write_repo(tmp_path: Path) -> Path:
    lock = {"packages": {"node_modules/lodash": {"version": "4.17.20"}}}
    (tmp_path / "package-lock.json").write_text(json.dumps(lock), encoding="utf-8")
    policy = tmp_path / "policy.json"
    policy.write_text(
        json.dumps({"policies": [{"package": "lodash", "constraints": ">= 4.17.21"}]}),
        encoding="utf-8",
    )
    return policy


def test_scan_fails_on_findings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    policy = _write_repo(tmp_path)
    summary = tmp_path / "summary.md"

    code = main(["scan", "--root", str(tmp_path), "--policy", str(policy), "--summary", str(summary)])

    assert code == EXIT_FINDINGS
    report = json.loads(capsys.readouterr().out)
    assert report["totals"]["findings"] == 1
    assert "| . | lodash | 4.17.20 |" in summary.read_text(encoding="utf-8")


def test_scan_warn_only(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    policy = _write_repo(tmp_path)
    monkeypatch.delenv("VERSIONCHECK_WARN_ONLY", raising=False)
    argv = ["scan", "--root", str(tmp_path), "--policy", str(policy)]

    assert main([*argv, "--warn-only"]) == EXIT_OK
    monkeypatch.setenv("VERSIONCHECK_WARN_ONLY", "true")
    assert main(argv) == EXIT_OK


def test_scan_missing_policy(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["scan", "--root", str(tmp_path), "--policy", str(tmp_path / "nope.json")])
    assert code == EXIT_ERROR
    assert "Policy file not found" in capsys.readouterr().err
