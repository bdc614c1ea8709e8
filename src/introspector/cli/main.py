"""introspector CLI - capture and sanitize object-inspection findings.

Run the governance filter over text, capture a finding for any importable
Python object, and render saved sessions as reports or safe payloads.
"""

import importlib
import json
import os
from pathlib import Path
from typing import Annotated, Any

import click
import typer
from rich.console import Console
from rich.panel import Panel

import introspector
from introspector import console as ic
from introspector.config import get_settings
from introspector.exceptions import CommandError, IntrospectorError
from introspector.governance import apply_governance_filter
from introspector.harvest import (
    capture_finding,
    create_session,
    finalize_session,
    render_report,
    render_safe_payload,
)
from introspector.logging import (
    bind_session_context,
    clear_session_context,
    configure_logging,
    get_logger,
)
from introspector.models import Environment, Session

# Configure logging early using env vars directly; -v/-vv and --log-format
# in main_callback() may reconfigure later.
configure_logging(
    level=os.environ.get("INTROSPECTOR_LOG_LEVEL", "WARNING"),
    json_output=os.environ.get("INTROSPECTOR_LOG_FORMAT", "console") == "json",
)

LOG = get_logger(__name__)

app = typer.Typer(
    name="introspector",
    help="""
    🔎 introspector - record and sanitize live object-inspection findings

    \b
    Quick start:
      introspector filter "notes to check"     Run the governance filter
      introspector inspect json:JSONDecoder    Capture one finding and print a report
      introspector render session.json         Render a saved session
      introspector config                      Show current configuration
    """,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@app.callback(invoke_without_command=True)
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase verbosity (-v for info, -vv for debug)",
        ),
    ] = 0,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            click_type=click.Choice(["console", "json"]),
            help="Log output format: console (human-readable) or json (structured)",
        ),
    ] = None,
) -> None:
    """introspector - record and sanitize live object-inspection findings."""
    settings = get_settings()
    json_output = (log_format or settings.log_format) == "json"

    if verbose >= 2:
        level = "DEBUG"
    elif verbose >= 1:
        level = "INFO"
    else:
        level = settings.log_level
    configure_logging(level=level, json_output=json_output)


def _fail(exc: IntrospectorError) -> typer.Exit:
    message = exc.user_message if isinstance(exc, CommandError) else str(exc)
    ic.error(message)
    return typer.Exit(code=1)


def resolve_target(target: str) -> Any:
    """Import the object named by "package.module" or "package.module:attr.path".

    Raises:
        CommandError: If the module cannot be imported or an attribute is missing.
    """
    module_name, _, attr_path = target.partition(":")
    if not module_name:
        raise CommandError(f"Target must look like 'module' or 'module:attribute', got {target!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise CommandError(f"Cannot import module {module_name!r}: {exc}") from exc

    for part in filter(None, attr_path.split(".")):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise CommandError(f"{target!r} has no attribute {part!r}") from exc
    return obj


def load_session_file(path: Path) -> Session:
    """Load a session saved as JSON by Session.to_dict().

    Raises:
        CommandError: If the file is unreadable or not a valid session.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CommandError(f"Cannot read session file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CommandError(f"Invalid JSON in '{path}': {exc}") from exc
    if not isinstance(data, dict):
        raise CommandError(f"Session file '{path}' must hold a JSON object")
    try:
        return Session.from_dict(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise CommandError(f"Session file '{path}' is not a valid session: {exc}") from exc


def _emit_view(session: Session, output_format: str) -> None:
    if output_format == "report":
        ic.emit_text(render_report(session))
    elif output_format == "payload":
        ic.emit_json(render_safe_payload(session).to_dict())
    else:
        ic.emit_json(session.to_dict())


@app.command("version")
def version() -> None:
    """Show introspector version and configuration source."""
    settings = get_settings()
    console.print(
        Panel(
            f"[bold cyan]introspector[/bold cyan] v{introspector.__version__}\n\n"
            f"[dim]Environment:[/dim] {settings.environment}\n"
            f"[dim]Patterns:[/dim]    {settings.patterns_file or 'built-in'}",
            title="Object inspection harvester",
            border_style="cyan",
        )
    )


@app.command("config")
def config() -> None:
    """Show current introspector configuration."""
    settings = get_settings()

    info = f"""
[dim]Environment:[/dim]      {settings.environment}
[dim]Player handle:[/dim]    {settings.player_handle}
[dim]Patterns file:[/dim]    {settings.patterns_file or "(built-in)"}
[dim]Policy version:[/dim]   {settings.policy_version}
[dim]Reviewer role:[/dim]    {settings.reviewer_role}
[dim]Log level:[/dim]        {settings.log_level}
[dim]Log format:[/dim]       {settings.log_format}"""

    console.print(Panel(info.strip(), title="⚙ Configuration", border_style="cyan"))


@app.command("filter")
def filter_text(
    text: Annotated[
        str | None,
        typer.Argument(help="Text to filter (omit when using --file)"),
    ] = None,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Read the text to filter from a file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the full result as JSON"),
    ] = False,
) -> None:
    """Redact secrets and flag banned signal markers in text.

    Detection is pattern based and best-effort; it is not a guarantee that
    every secret is found.
    """
    try:
        if file is not None:
            text = file.read_text(encoding="utf-8")
        if text is None:
            raise CommandError("Provide TEXT or --file")
        result = apply_governance_filter(text)
    except IntrospectorError as exc:
        raise _fail(exc) from exc

    if as_json:
        ic.emit_json(
            {
                "redacted": result.redacted,
                "secret_count": result.secret_count,
                "flags": list(result.flags),
                "blocked": result.blocked,
            }
        )
        return

    ic.emit_text(result.redacted + "\n")
    if result.blocked:
        ic.warn(f"Blocked by neurosignal markers: {', '.join(result.flags)}")
    elif result.secret_count:
        ic.warn(f"Redacted {result.secret_count} secret pattern(s): {', '.join(result.flags)}")
    else:
        ic.success("No governance patterns matched")


@app.command("inspect")
def inspect_target(
    target: Annotated[
        str,
        typer.Argument(help="Object to inspect, as 'module' or 'module:attribute.path'"),
    ],
    segments: Annotated[
        list[str] | None,
        typer.Argument(help="Navigation path segments from the target to the inspected leaf"),
    ] = None,
    notes: Annotated[
        str | None,
        typer.Option("--notes", "-n", help="Free-text notes (governance filtered)"),
    ] = None,
    source_location: Annotated[
        str | None,
        typer.Option("--source-location", "-s", help="Inspection site as file:line:col"),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Tag to attach (repeatable)"),
    ] = None,
    environment: Annotated[
        str | None,
        typer.Option(
            "--environment",
            "-e",
            click_type=click.Choice([e.value for e in Environment]),
            help="Environment tag (default: INTROSPECTOR_ENVIRONMENT)",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            click_type=click.Choice(["report", "payload", "session"]),
            help="Output view",
        ),
    ] = "report",
) -> None:
    """Capture one finding for an importable object and print a view of it."""
    try:
        root = resolve_target(target)
        session = create_session(environment=environment)
        bind_session_context(session.session_id, str(session.environment))
        try:
            capture_finding(
                session,
                root,
                segments or [],
                notes=notes,
                source_location=source_location,
                tags=tags or [],
            )
            finalize_session(session)
        finally:
            clear_session_context()
    except IntrospectorError as exc:
        raise _fail(exc) from exc

    _emit_view(session, output_format)


@app.command("render")
def render(
    session_file: Annotated[
        Path,
        typer.Argument(
            help="Session JSON file written from Session.to_dict()",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            click_type=click.Choice(["report", "payload"]),
            help="Output view",
        ),
    ] = "report",
) -> None:
    """Render a saved session as a report or a safe payload."""
    try:
        session = load_session_file(session_file)
        LOG.debug("session_loaded", session_id=session.session_id, path=str(session_file))
        if output_format == "report" and not session.is_finalized:
            finalize_session(session)
    except IntrospectorError as exc:
        raise _fail(exc) from exc

    _emit_view(session, output_format)


if __name__ == "__main__":
    app()
