"""Command-line interface for formulacalc."""

from __future__ import annotations

import json
import math
from pathlib import Path

import click

from formulacalc import __version__
from formulacalc.formulas import FormulaConfigError, FormulaEngine


@click.group()
@click.version_option(version=__version__, prog_name="formulacalc")
def main() -> None:
    """formulacalc -- evaluate and render free-form formulas.

    Variables are single letters; adjacent letters and digits multiply
    (``2ab`` is ``2 * a * b``).
    """


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _parse_bindings(items: tuple[str, ...]) -> dict[str, float]:
    bindings: dict[str, float] = {}
    for item in items:
        if "=" not in item:
            raise click.ClickException(f"Invalid --var format: {item!r}. Use name=value.")
        name, raw = item.split("=", 1)
        name = name.strip()
        try:
            bindings[name] = float(raw)
        except ValueError:
            raise click.ClickException(f"Invalid value for {name!r}: {raw!r} is not a number")
    return bindings


def _load_engine(project_dir: str | None) -> tuple[FormulaEngine, dict[str, float]]:
    """Build an engine (and default bindings) from an optional project dir.

    Also attaches the project's event log, so calculations are recorded.
    """
    if project_dir is None:
        return FormulaEngine(), {}

    from formulacalc.logging.events import EventType, emit_info, set_project_dir
    from formulacalc.project import (
        formula_config_from_project,
        load_project_config,
        project_variables,
    )

    path = Path(project_dir)
    try:
        cfg = load_project_config(path)
        config = formula_config_from_project(cfg)
        defaults = project_variables(cfg)
    except FormulaConfigError as e:
        raise click.ClickException(str(e))

    set_project_dir(path)
    emit_info(
        EventType.config_loaded,
        f"Loaded configuration (preset {cfg.get('preset')})",
        {"functions": list(config.function_names), "operators": list(config.operator_symbols)},
    )
    return FormulaEngine(config), defaults


def format_value(value: float | None) -> str:
    """Render a result for display: integral values without ``.0``."""
    if value is None:
        return "No result"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


_project_option = click.option(
    "--project-dir",
    "project_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False),
    help="Project directory holding formulacalc.yaml.",
)


# ---------------------------------------------------------------------------
# Eval
# ---------------------------------------------------------------------------


@main.command("eval")
@click.argument("formula")
@click.option("--var", "variables", multiple=True, help="Bind a variable as name=value.")
@_project_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def eval_cmd(formula: str, variables: tuple[str, ...], project_dir: str | None, as_json: bool) -> None:
    """Evaluate FORMULA with the given variable bindings."""
    engine, bindings = _load_engine(project_dir)
    bindings.update(_parse_bindings(variables))
    result = engine.calculate(formula, bindings)

    if as_json:
        payload = result.model_dump()
        payload["ok"] = result.ok
        # NaN and infinities have no JSON literal
        if result.value is not None and not math.isfinite(result.value):
            payload["value"] = format_value(result.value)
        click.echo(json.dumps(payload, indent=2, allow_nan=False))
        if not result.ok:
            raise SystemExit(1)
        return

    if not result.ok:
        raise click.ClickException(f"{result.error} ({result.error_code})")
    click.echo(format_value(result.value))


# ---------------------------------------------------------------------------
# Tokens / variables / markup
# ---------------------------------------------------------------------------


@main.command("tokens")
@click.argument("formula")
@_project_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def tokens_cmd(formula: str, project_dir: str | None, as_json: bool) -> None:
    """Show the token sequence of FORMULA."""
    engine, _ = _load_engine(project_dir)
    tokens = engine.tokenize(formula)
    if as_json:
        click.echo(json.dumps([t.model_dump(mode="json") for t in tokens], indent=2))
        return
    for token in tokens:
        click.echo(f"{token.kind.value:10s} {token.text}")


@main.command("vars")
@click.argument("formula")
@_project_option
def vars_cmd(formula: str, project_dir: str | None) -> None:
    """List the variables FORMULA needs bindings for."""
    engine, _ = _load_engine(project_dir)
    names = engine.extract_variables(formula)
    if not names:
        click.echo("No variables.")
        return
    for name in names:
        click.echo(name)


@main.command("markup")
@click.argument("formula")
@click.option("--display", is_flag=True, help="Drop '*' after letters and digits.")
@click.option("--clean", is_flag=True, help="Strip backslashes (plain-text copy).")
@_project_option
def markup_cmd(formula: str, display: bool, clean: bool, project_dir: str | None) -> None:
    """Render FORMULA as display markup."""
    engine, _ = _load_engine(project_dir)
    markup = engine.to_display_markup(formula) if display else engine.to_markup(formula)
    if clean:
        markup = engine.clean_markup(markup)
    click.echo(markup)


@main.command("functions")
@_project_option
def functions_cmd(project_dir: str | None) -> None:
    """List configured functions (in match order) and operators."""
    engine, _ = _load_engine(project_dir)
    click.echo("Functions: " + ", ".join(engine.config.function_names))
    click.echo("Operators:")
    for symbol, op in engine.config.operators.items():
        click.echo(f"  {symbol}  precedence {op.precedence}")


# ---------------------------------------------------------------------------
# Init
# ---------------------------------------------------------------------------


@main.command("init")
@click.argument("directory", type=click.Path())
def init_cmd(directory: str) -> None:
    """Scaffold a project with a default formulacalc.yaml at DIRECTORY."""
    from formulacalc.project import scaffold_project

    try:
        result = scaffold_project(Path(directory))
    except FileExistsError as e:
        raise click.ClickException(str(e))
    click.echo(f"Created project at {result}")


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@main.command("events")
@click.argument("directory", type=click.Path(exists=True))
@click.option("--level", default=None, type=click.Choice(["info", "warning", "error"]), help="Filter by level.")
@click.option("--type", "event_type", default=None, help="Filter by event type.")
@click.option("--code", "error_code", default=None, help="Filter by error code.")
@click.option("--formula", default=None, help="Only events about this exact formula.")
@click.option("--limit", default=100, type=int, help="Maximum events to show.")
def events_cmd(
    directory: str,
    level: str | None,
    event_type: str | None,
    error_code: str | None,
    formula: str | None,
    limit: int,
) -> None:
    """Show structured event log for DIRECTORY."""
    from formulacalc.logging.sink import EventSink

    sink = EventSink(Path(directory))
    events = sink.read_events(
        level=level,
        event_type=event_type,
        error_code=error_code,
        formula=formula,
        limit=limit,
    )

    if not events:
        click.echo("No events found.")
        return

    for evt in events:
        ts = evt.get("ts", "")
        lvl = evt.get("level", "").upper()
        etype = evt.get("event_type", "")
        msg = evt.get("message", "")
        err = evt.get("error_code")
        line = f"[{ts}] {lvl:7s} {etype}: {msg}"
        if err:
            line += f"  ({err})"
        click.echo(line)


if __name__ == "__main__":
    main()
