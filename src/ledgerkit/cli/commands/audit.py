"""Audit outbox commands."""

import json

import click
from ledgerkit.domain.audit import AuditService
from ledgerkit.domain.entities import AuditEvent


def _event_to_json(event: AuditEvent) -> str:
    return json.dumps(
        {
            "id": event.id,
            "company_id": event.company_id,
            "actor_id": event.actor_id,
            "action": event.action.value,
            "record_type": event.record_type,
            "record_id": event.record_id,
            "description": event.description,
            "occurred_at": event.occurred_at.isoformat(),
        }
    )


@click.group()
def audit_group():
    """Inspect and deliver audit events."""
    pass


@audit_group.command("list")
@click.option("--pending", is_flag=True, help="Only list events not yet dispatched")
@click.pass_context
def list_events(ctx, pending: bool):
    """List the company's audit events, oldest first."""
    service = AuditService(ctx.obj["db"])
    company_id = ctx.obj["company_id"]
    events = service.pending_events(company_id) if pending else service.list_events(company_id)

    if not events:
        click.echo("No audit events found.")
        return

    for event in events:
        state = "pending" if event.dispatched_at is None else "dispatched"
        click.echo(
            f"{event.id:>4} {event.occurred_at:%Y-%m-%d %H:%M:%S} {event.action.value:<6} "
            f"{event.record_type}:{event.record_id} user {event.actor_id} [{state}] {event.description}"
        )


@audit_group.command("dispatch")
@click.pass_context
def dispatch_events(ctx):
    """Deliver pending audit events as JSON lines on stdout.

    Each event is marked dispatched after it has been written.
    """
    service = AuditService(ctx.obj["db"])
    count = service.dispatch_pending(
        lambda event: click.echo(_event_to_json(event)),
        company_id=ctx.obj["company_id"],
    )
    click.echo(f"Dispatched {count} event(s)", err=True)


def register_commands(cli):
    """Register audit commands with main CLI."""
    cli.add_command(audit_group, name="audit")
