"""OpsHub CLI entry point."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from opshub.config.models import OpsHubConfig
    from opshub.fleet.detail import WorkflowDetail
    from opshub.fleet.models import Workflow

app = typer.Typer(
    name="opshub",
    help="OpsHub: client workflow control center",
    no_args_is_help=True,
)
console = Console()

STATUS_STYLES = {
    "healthy": "green",
    "warning": "yellow",
    "failed": "red",
    "paused": "dim",
}
SLA_STYLES = {"low": "green", "medium": "yellow", "high": "red"}


def _load_fleet(
    snapshot: Path | None, config_path: Path | None
) -> tuple[OpsHubConfig, tuple[Workflow, ...]]:
    """Resolve config and snapshot, exiting with a message on failure."""
    import yaml

    from opshub.config.loader import load_config
    from opshub.config.models import OpsHubConfig
    from opshub.fleet.errors import DataIntegrityError
    from opshub.fleet.snapshot import load_snapshot

    try:
        config = load_config(path=config_path)
    except FileNotFoundError as exc:
        if snapshot is None:
            console.print(f"[red]{escape(str(exc))}[/red]")
            raise typer.Exit(1)
        config = OpsHubConfig()
    except (ValueError, yaml.YAMLError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    logging.basicConfig(level=config.log_level)

    try:
        workflows = load_snapshot(snapshot or Path(config.snapshot_path))
    except (FileNotFoundError, DataIntegrityError, yaml.YAMLError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)
    return config, workflows


def _parse_now(now: str | None) -> datetime:
    if now is None:
        return datetime.now(UTC)
    try:
        parsed = datetime.fromisoformat(now)
    except ValueError:
        console.print(f"[red]Invalid --now timestamp: {now}[/red]")
        raise typer.Exit(1)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _print_detail(detail: WorkflowDetail) -> None:
    style = STATUS_STYLES.get(detail.status, "white")
    next_run = detail.next_run
    if detail.next_run_calendar:
        next_run += f" [dim]({detail.next_run_calendar})[/dim]"
    lines = [
        f"[bold]{escape(detail.name)}[/bold] · {escape(detail.client)}  [{style}]{detail.status_label}[/{style}]",
        f"Last run: {detail.last_run} [dim]({detail.last_run_calendar})[/dim]",
        f"Next run: {next_run}",
        f"Run cadence: {detail.cadence}",
        f"Success rate: {detail.success_percent}",
    ]
    if detail.recent_runs:
        lines.append("Execution trend:")
        for run in detail.recent_runs:
            marker = "[green]Clean[/green]" if run.clean else f"[red]{run.outcome}[/red]"
            lines.append(f"  {run.when}  {run.duration:>7}  {marker}")
    lines.append(f"[bold]{detail.guidance}[/bold]")
    lines.append(f"SLA risk: {detail.sla_risk} • Owner: {escape(detail.owner)}")
    console.print(Panel("\n".join(lines), title="Selected workflow"))


@app.command()
def dashboard(
    client: str = typer.Option("all", "--client", "-c", help="Client to show, or 'all'"),
    status: str = typer.Option("all", "--status", "-s", help="healthy, warning, failed, paused or 'all'"),
    search: str = typer.Option("", "--search", "-q", help="Match workflow name or client"),
    select: str | None = typer.Option(None, "--select", help="Workflow id to drill into"),
    snapshot: Path | None = typer.Option(None, "--snapshot", help="Workflow snapshot file"),
    config_path: Path | None = typer.Option(None, "--config", help="Path to .opshub.yaml"),
    now: str | None = typer.Option(None, "--now", help="Reference time (ISO-8601)"),
) -> None:
    """Show fleet metrics, the filtered workflow table and the selected workflow."""
    from opshub.fleet.detail import describe_workflow, format_duration, format_percent
    from opshub.fleet.errors import DataIntegrityError
    from opshub.fleet.view import ViewState, compose_view

    config, workflows = _load_fleet(snapshot, config_path)
    reference = _parse_now(now)

    state = ViewState.initial(workflows).with_client(client).with_status(status).with_search(search)
    if select is not None:
        state = state.select(select)
    try:
        view = compose_view(workflows, state)
    except DataIntegrityError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    summary = view.summary
    console.print(f"[bold]{config.hub.name}[/bold]")
    console.print(
        f"Managed workflows: [bold]{summary.total_workflows}[/bold] "
        f"({summary.healthy} healthy • {summary.warning} warning • {summary.failed} failed)"
    )
    console.print(
        f"Runs today: [bold]{summary.total_runs_today}[/bold]   "
        f"Success rate: [bold]{format_percent(summary.avg_success_rate)}[/bold]   "
        f"Avg duration: [bold]{format_duration(summary.average_duration_seconds)}[/bold]\n"
    )

    if not view.workflows:
        console.print("[dim]No workflows match the current filters.[/dim]")
        return

    table = Table(title="Workflows")
    table.add_column("", width=1)
    table.add_column("Workflow", style="bold")
    table.add_column("Client")
    table.add_column("Status")
    table.add_column("Runs", justify="right")
    table.add_column("Success", justify="right")
    table.add_column("Owner")
    table.add_column("SLA")

    for wf in view.workflows:
        marker = "›" if view.selected is not None and wf.id == view.selected.id else ""
        style = STATUS_STYLES.get(wf.status, "white")
        sla = SLA_STYLES.get(wf.sla_breach_risk, "white")
        table.add_row(
            marker,
            escape(wf.name),
            escape(wf.client),
            f"[{style}]{wf.status}[/{style}]",
            str(wf.runs_today),
            format_percent(wf.success_rate),
            escape(wf.owner),
            f"[{sla}]{wf.sla_breach_risk.upper()}[/{sla}]",
        )
    console.print(table)

    if view.selected is not None:
        _print_detail(
            describe_workflow(
                view.selected,
                reference,
                trend_size=config.display.run_trend_size,
                tz=config.display.timezone,
            )
        )


@app.command()
def clients(
    snapshot: Path | None = typer.Option(None, "--snapshot", help="Workflow snapshot file"),
    config_path: Path | None = typer.Option(None, "--config", help="Path to .opshub.yaml"),
) -> None:
    """List the clients present in the fleet."""
    from opshub.fleet.filters import client_options

    _, workflows = _load_fleet(snapshot, config_path)
    for option in client_options(workflows):
        console.print("All clients" if option == "all" else escape(option))


@app.command()
def show(
    workflow_id: str = typer.Argument(help="Workflow id"),
    snapshot: Path | None = typer.Option(None, "--snapshot", help="Workflow snapshot file"),
    config_path: Path | None = typer.Option(None, "--config", help="Path to .opshub.yaml"),
    now: str | None = typer.Option(None, "--now", help="Reference time (ISO-8601)"),
) -> None:
    """Show the details of a single workflow."""
    from opshub.fleet.detail import describe_workflow

    config, workflows = _load_fleet(snapshot, config_path)
    reference = _parse_now(now)

    workflow = next((wf for wf in workflows if wf.id == workflow_id), None)
    if workflow is None:
        console.print(f"[red]Unknown workflow: {escape(workflow_id)}[/red]")
        raise typer.Exit(1)
    _print_detail(
        describe_workflow(
            workflow,
            reference,
            trend_size=config.display.run_trend_size,
            tz=config.display.timezone,
        )
    )


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8000, help="Bind port"),
) -> None:
    """Start the OpsHub API server."""
    import uvicorn

    console.print(f"[bold]OpsHub[/bold] starting on http://{host}:{port}")
    uvicorn.run("opshub.api.app:app", host=host, port=port, reload=False)


config_app = typer.Typer(name="config", help="Configuration commands")
app.add_typer(config_app)


@config_app.command("validate")
def config_validate(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .opshub.yaml"),
) -> None:
    """Validate the configuration file and the snapshot it points at."""
    import yaml

    from opshub.config.loader import load_config
    from opshub.fleet.errors import DataIntegrityError
    from opshub.fleet.snapshot import load_snapshot

    try:
        config = load_config(path=path)
        console.print("[green]✓[/green] YAML parses correctly")
        console.print("[green]✓[/green] Pydantic validation passes")
    except FileNotFoundError as exc:
        console.print(f"[red]✗ {escape(str(exc))}[/red]")
        raise typer.Exit(1)
    except yaml.YAMLError as exc:
        console.print(f"[red]✗ YAML parsing failed: {escape(str(exc))}[/red]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print("[green]✓[/green] YAML parses correctly")
        console.print(f"[red]✗ Pydantic validation failed: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    try:
        workflows = load_snapshot(Path(config.snapshot_path))
    except FileNotFoundError as exc:
        console.print(f"[red]✗ {escape(str(exc))}[/red]")
        raise typer.Exit(1)
    except (DataIntegrityError, yaml.YAMLError) as exc:
        console.print(f"[red]✗ Snapshot invalid: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Snapshot holds {len(workflows)} workflow(s)")
    out_of_range = [wf.id for wf in workflows if not 0.0 <= wf.success_rate <= 1.0]
    for wf_id in out_of_range:
        console.print(f"[yellow]! Workflow '{wf_id}': success rate outside [0, 1][/yellow]")
    console.print("\n[green bold]Configuration is valid.[/green bold]")


@config_app.command("show")
def config_show(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to .opshub.yaml"),
) -> None:
    """Print resolved configuration."""
    from opshub.config.loader import load_config

    try:
        config = load_config(path=path)
    except FileNotFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]OpsHub[/bold] {config.hub.name} v{config.hub.version}\n")
    console.print(f"[bold]Snapshot:[/bold] {config.snapshot_path}")
    console.print("[bold]Display:[/bold]")
    console.print(f"  Timezone: {config.display.timezone}")
    console.print(f"  Run trend size: {config.display.run_trend_size}")
    console.print(f"[bold]Log level:[/bold] {config.log_level}")


def main() -> None:
    app()
