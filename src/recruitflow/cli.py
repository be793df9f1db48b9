"""Typer CLI entrypoint for the recruitment workflow."""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional

import typer
import yaml
from pydantic import ValidationError

from .container import create_container
from .core import UserRole
from .errors import RecruitmentError
from .logging import configure_logging
from .schemas.config import load_config
from .storage import Snapshot, SnapshotStore
from .workflow import RecruitmentService

app = typer.Typer(help="Recruitment workflow CLI.", no_args_is_help=True)


@dataclass
class _Options:
    state: Optional[Path]
    settings: dict[str, Any]


@app.callback()
def main_options(
    ctx: typer.Context,
    state: Optional[Path] = typer.Option(None, dir_okay=False, help="Snapshot file holding the workflow state."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: Optional[str] = typer.Option(None, help="Log level; overrides log_level from the config."),
) -> None:
    settings: dict[str, Any] = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
            if not isinstance(loaded, dict):
                raise typer.BadParameter("Config file must be a YAML object", param_name="config")
            settings = loaded
    try:
        app_config = load_config(settings)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc
    configure_logging(log_level or app_config.log_level)
    ctx.obj = _Options(state=state, settings=settings)


@contextmanager
def _session(ctx: typer.Context) -> Iterator[RecruitmentService]:
    options: _Options = ctx.obj
    app_config = load_config(options.settings)
    store = SnapshotStore(options.state or app_config.storage.snapshot_path)
    snapshot = store.load()

    container = create_container(
        settings=options.settings,
        center=snapshot.center if snapshot else None,
        current_date=snapshot.current_date if snapshot else None,
    )
    service = container.service()
    try:
        yield service
    except (RecruitmentError, ValueError, FileNotFoundError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    store.save(Snapshot(center=service.center, current_date=service.clock.now()))


@app.command()
def register(
    ctx: typer.Context,
    username: str = typer.Argument(..., help="New username."),
    role: UserRole = typer.Option(..., case_sensitive=False, help="User role."),
    email: str = typer.Option(..., help="Contact email."),
    company: Optional[str] = typer.Option(None, help="Company id (required for employees)."),
    first_name: str = typer.Option("", help="First name."),
    last_name: str = typer.Option("", help="Last/family name."),
) -> None:
    """Register an applicant, hiring manager, recruiter or interviewer."""
    with _session(ctx) as service:
        user = service.register_user(
            {
                "username": username,
                "role": role,
                "email": email,
                "company_id": company,
                "first_name": first_name,
                "last_name": last_name,
            }
        )
    typer.echo(f"Registered {user.role.value.lower()} {user.username}.")


@app.command("post-job")
def post_job(
    ctx: typer.Context,
    manager: str = typer.Option(..., help="Hiring manager username."),
    position: str = typer.Option(..., help="Position name."),
    positions: int = typer.Option(..., min=1, help="Number of openings."),
    close_date: str = typer.Option(..., help="Close date (YYYY-MM-DD)."),
    recruiter: Optional[str] = typer.Option(None, help="Recruiter in charge."),
    job_id: Optional[str] = typer.Option(None, help="Explicit job posting id."),
    cv: bool = typer.Option(False, "--cv", help="Require a CV."),
    cover_letter: bool = typer.Option(False, "--cover-letter", help="Require a cover letter."),
    reference: bool = typer.Option(False, "--reference", help="Require a reference."),
) -> None:
    """Open a new job posting."""
    details: dict[str, Any] = {
        "position_name": position,
        "num_of_positions": positions,
        "close_date": close_date,
        "recruiter_id": recruiter,
        "cv": cv,
        "cover_letter": cover_letter,
        "reference": reference,
    }
    if job_id:
        details["job_id"] = job_id
    with _session(ctx) as service:
        posting = service.post_job(manager, details)
    typer.echo(posting.job_id)


@app.command()
def tick(
    ctx: typer.Context,
    days: int = typer.Option(0, min=0, help="Simulated days to advance before checking."),
) -> None:
    """Advance the simulated date and move expired postings into processing."""
    with _session(ctx) as service:
        closed = service.advance_days(days) if days else service.tick()
        today = service.clock.now().isoformat()
    typer.echo(f"Today is {today}. {len(closed)} posting(s) moved to processing.")
    for posting in closed:
        typer.echo(f"  {posting.job_id}")


@app.command("apply")
def start_application(ctx: typer.Context, username: str, job_id: str) -> None:
    """Create a draft application."""
    with _session(ctx) as service:
        service.start_application(username, job_id)
    typer.echo(f"Draft application created for {job_id}.")


@app.command()
def submit(ctx: typer.Context, username: str, job_id: str) -> None:
    """Submit a draft application."""
    with _session(ctx) as service:
        service.submit_application(username, job_id)
    typer.echo(f"Application to {job_id} submitted.")


@app.command()
def withdraw(ctx: typer.Context, username: str, job_id: str) -> None:
    """Withdraw a pending application back to draft."""
    with _session(ctx) as service:
        service.withdraw_application(username, job_id)
    typer.echo(f"Application to {job_id} withdrawn.")


@app.command("delete-application")
def delete_application(ctx: typer.Context, username: str, job_id: str) -> None:
    """Delete a draft application."""
    with _session(ctx) as service:
        service.delete_application(username, job_id)
    typer.echo(f"Draft application for {job_id} deleted.")


@app.command()
def upload(
    ctx: typer.Context,
    username: str,
    path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    job_id: Optional[str] = typer.Option(None, "--job", help="Also attach to this draft application."),
) -> None:
    """Upload a document, optionally attaching it to an application."""
    with _session(ctx) as service:
        document = service.upload_document(username, path)
        if job_id:
            service.attach_document(username, job_id, document.name)
    typer.echo(f"Uploaded {document.name}.")


@app.command()
def documents(ctx: typer.Context, username: str) -> None:
    """List an applicant's documents after evicting stale ones."""
    with _session(ctx) as service:
        held = service.list_documents(username)
    for document in held:
        fields = document.filter_map()
        typer.echo(f"{fields['document name']}\t{fields['last used date']}")
    if not held:
        typer.echo("No documents.")


@app.command("add-round")
def add_round(ctx: typer.Context, job_id: str, name: str) -> None:
    """Append an interview round to a processing posting."""
    with _session(ctx) as service:
        service.add_round(job_id, name)
    typer.echo(f"Round {name} added.")


@app.command()
def advance(ctx: typer.Context, job_id: str) -> None:
    """Start the next interview round."""
    with _session(ctx) as service:
        interview_round = service.advance_round(job_id)
    typer.echo(f"Round {interview_round.name} started with {len(interview_round.applications)} application(s).")


@app.command()
def match(ctx: typer.Context, job_id: str, applicant: str, interviewer: str) -> None:
    """Match an applicant's current-round interview to an interviewer."""
    with _session(ctx) as service:
        service.match_interview(job_id, applicant, interviewer)
    typer.echo(f"{applicant} matched with {interviewer}.")


@app.command()
def result(
    ctx: typer.Context,
    interviewer: str,
    job_id: str,
    applicant: str,
    passed: bool = typer.Option(..., "--pass/--fail", help="Interview outcome."),
    recommendation: Optional[str] = typer.Option(None, help="Free-text recommendation."),
) -> None:
    """Record an interviewer's verdict."""
    with _session(ctx) as service:
        interview = service.record_interview_result(
            interviewer, job_id, applicant, passed=passed, recommendation=recommendation
        )
    typer.echo(f"Interview marked {interview.status.value}.")


@app.command()
def hire(ctx: typer.Context, job_id: str, applicant: str) -> None:
    """Hire a pending applicant."""
    with _session(ctx) as service:
        service.hire(job_id, applicant)
    typer.echo(f"{applicant} hired for {job_id}.")


@app.command()
def interviews(ctx: typer.Context, username: str) -> None:
    """Show an applicant's ongoing and past interviews."""
    with _session(ctx) as service:
        grouped = service.applicant_interviews(username)
    for label, items in grouped.items():
        typer.echo(f"{label}:")
        for interview in items:
            fields = interview.filter_map()
            typer.echo(
                f"  {interview.application.job_posting_id}\t{fields['round']}"
                f"\t{fields['interviewer']}\t{fields['status']}"
            )


@app.command()
def close(ctx: typer.Context, job_id: str) -> None:
    """Finish a posting and notify rejected applicants."""
    with _session(ctx) as service:
        sent = service.close_posting(job_id)
    typer.echo(f"Posting {job_id} finished; {sent} rejection(s) sent.")


@app.command()
def inbox(
    ctx: typer.Context,
    username: str,
    role: UserRole = typer.Option(..., case_sensitive=False, help="Role of the account to read."),
) -> None:
    """Print and clear a user's unread messages."""
    with _session(ctx) as service:
        messages = service.read_messages(username, role)
    for message in messages:
        typer.echo(message)
    if not messages:
        typer.echo("No new messages.")


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Terms separated by ';'."),
    include_closed: bool = typer.Option(False, "--all", help="Include postings that are no longer open."),
) -> None:
    """Search job postings."""
    with _session(ctx) as service:
        postings = service.search_postings(query, open_only=not include_closed)
    for posting in postings:
        fields = posting.filter_map()
        typer.echo(f"{fields['job id']}\t{fields['position (no.)']}\t{fields['close date']}\t{fields['status']}")


@app.command()
def status(ctx: typer.Context, job_id: str) -> None:
    """Show a posting's rounds and applications as JSON."""
    with _session(ctx) as service:
        summary = service.posting_summary(job_id)
    typer.echo(json.dumps(summary, ensure_ascii=False, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
