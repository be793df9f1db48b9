from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from recruitflow.cli import app
from recruitflow.storage import SnapshotStore


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli(tmp_path: Path, runner: CliRunner):
    config_path = tmp_path / "recruitflow.yaml"
    config_path.write_text(
        "clock:\n"
        "  start_date: 2024-01-01\n"
        "storage:\n"
        f"  audit_log: {tmp_path / 'audit.jsonl'}\n",
        encoding="utf-8",
    )
    state_path = tmp_path / "state.snapshot"

    def invoke(*args: str, expect_ok: bool = True):
        result = runner.invoke(app, ["--state", str(state_path), "--config", str(config_path), *args])
        if expect_ok:
            assert result.exit_code == 0, result.output
        return result

    return invoke


def setup_posting(cli) -> None:
    cli("register", "hm", "--role", "hiring_manager", "--email", "hm@acme.com", "--company", "acme")
    cli("register", "ivy", "--role", "interviewer", "--email", "ivy@acme.com", "--company", "acme")
    cli("register", "alice", "--role", "applicant", "--email", "alice@mail.com")
    result = cli(
        "post-job",
        "--manager", "hm",
        "--position", "Developer",
        "--positions", "1",
        "--close-date", "2024-01-10",
        "--job-id", "acme-dev",
    )
    assert result.output.strip() == "acme-dev"


def test_cli_runs_full_hiring_flow(tmp_path: Path, cli) -> None:
    setup_posting(cli)
    cli("apply", "alice", "acme-dev")
    cli("submit", "alice", "acme-dev")

    search = cli("search", "develop")
    assert "acme-dev" in search.output

    tick = cli("tick", "--days", "10")
    assert "Today is 2024-01-11" in tick.output
    assert "acme-dev" in tick.output

    cli("add-round", "acme-dev", "R1")
    advance = cli("advance", "acme-dev")
    assert "Round R1 started with 1 application(s)." in advance.output
    cli("match", "acme-dev", "alice", "ivy")
    cli("result", "ivy", "acme-dev", "alice", "--pass", "--recommendation", "solid")
    cli("hire", "acme-dev", "alice")

    interviews = cli("interviews", "alice")
    assert "acme-dev\tR1\tivy\tPASS" in interviews.output

    status = json.loads(cli("status", "acme-dev").output)
    assert status["status"] == "PROCESSING"
    assert status["applications"] == {"alice": "HIRED"}
    assert status["rounds"][0]["status"] == "FINISHED"

    close = cli("close", "acme-dev")
    assert "0 rejection(s) sent" in close.output

    inbox = cli("inbox", "ivy", "--role", "interviewer")
    assert inbox.output.strip() == "You got a new interview!"
    assert cli("inbox", "ivy", "--role", "interviewer").output.strip() == "No new messages."

    snapshot = SnapshotStore(tmp_path / "state.snapshot").load()
    assert snapshot is not None
    assert snapshot.current_date.isoformat() == "2024-01-11"
    events = [
        json.loads(line)["event"]
        for line in (tmp_path / "audit.jsonl").read_text(encoding="utf-8").splitlines()
    ]
    assert events[-1] == "posting.finished"


def test_cli_reports_workflow_errors(cli) -> None:
    setup_posting(cli)
    cli("apply", "alice", "acme-dev")
    cli("submit", "alice", "acme-dev")
    cli("tick", "--days", "10")

    result = cli("advance", "acme-dev", expect_ok=False)

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_cli_failed_command_does_not_save_state(tmp_path: Path, cli) -> None:
    cli("register", "alice", "--role", "applicant", "--email", "alice@mail.com")

    result = cli("register", "bob", "--role", "applicant", "--email", "bob@mail.org", expect_ok=False)

    assert result.exit_code == 1
    snapshot = SnapshotStore(tmp_path / "state.snapshot").load()
    assert snapshot.center.get_applicant("bob") is None
    assert snapshot.center.get_applicant("alice") is not None


def test_cli_rejects_round_changes_after_close(cli) -> None:
    setup_posting(cli)
    cli("apply", "alice", "acme-dev")
    cli("submit", "alice", "acme-dev")
    cli("tick", "--days", "10")
    cli("add-round", "acme-dev", "R1")
    cli("advance", "acme-dev")
    cli("close", "acme-dev")

    result = cli("match", "acme-dev", "alice", "ivy", expect_ok=False)

    assert result.exit_code == 1
    assert "Wrong job posting status! Should be PROCESSING" in result.output
    assert cli("add-round", "acme-dev", "R2", expect_ok=False).exit_code == 1
    assert cli("inbox", "alice", "--role", "applicant").output.strip() == (
        "Sorry! You are rejected by a Job Posting!"
    )


def test_cli_document_and_draft_commands(tmp_path: Path, cli) -> None:
    setup_posting(cli)
    resume = tmp_path / "resume.txt"
    resume.write_text("Alice\n", encoding="utf-8")
    cli("apply", "alice", "acme-dev")
    cli("upload", "alice", str(resume), "--job", "acme-dev")

    listed = cli("documents", "alice")
    assert "resume.txt\t2024-01-01" in listed.output

    cli("delete-application", "alice", "acme-dev")
    assert cli("submit", "alice", "acme-dev", expect_ok=False).exit_code == 1

    cli("tick", "--days", "40")
    assert cli("documents", "alice").output.strip() == "No documents."
