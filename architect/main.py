"""
Architect CLI entrypoint.

Usage:
    architect --help
    architect build
    architect plan --only model,migration
    architect validate draft.yaml
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from architect import __version__
from architect.core.observability.logging_config import resolve_level, setup_from_env


def _settings(ctx: click.Context):
    """Load settings for a command, exiting with 1 on a config error."""
    from architect.core.config.loader import load_settings
    from architect.core.errors import ConfigError

    try:
        return load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        if ctx.obj.get("as_json"):
            click.echo(json.dumps({"success": False, "errors": [str(e)]}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _only(values: tuple[str, ...]) -> list[str] | None:
    from architect.core.services.generators.registry import parse_only

    return parse_only(values)


@click.group()
@click.version_option(version=__version__, prog_name="architect")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to architect.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Architect: build framework source files from a YAML draft."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_from_env(resolve_level(debug=debug, verbose=verbose, quiet=quiet))


@cli.command()
@click.argument("draft", required=False)
@click.option("--only", "only", multiple=True, help="Generators to run (repeatable or comma-separated).")
@click.option("--force", is_flag=True, help="Overwrite scaffold_only files that changed.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def build(ctx: click.Context, draft: str | None, only: tuple[str, ...], force: bool, as_json: bool) -> None:
    """Build the draft into source files.

    Examples:

        architect build

        architect build draft.yaml --only model --only migration

        architect build --only controller,request --force
    """
    from architect.core.use_cases.build import build as run_build

    ctx.obj["as_json"] = as_json
    result = run_build(draft, only=_only(only), force=force, settings=_settings(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.success else 1)

    if not result.success:
        click.secho("❌ Build failed:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")
        sys.exit(1)

    if result.no_changes:
        click.secho("✓ No changes since the last build", fg="green")
        return

    quiet = ctx.obj.get("quiet", False)
    click.secho(f"\n🏗  Build complete: {len(result.generated)} written", fg="cyan", bold=True)
    for path, record in result.generated.items():
        click.secho("   ✓ ", fg="green", nl=False)
        click.echo(f"{path}  [{record.generator}]")
    if result.skipped and not quiet:
        click.echo(f"   ⊘ {len(result.skipped)} unchanged or protected")
        if ctx.obj.get("verbose"):
            for path in result.skipped:
                click.echo(f"     • {path}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")
    click.echo()


@cli.command()
@click.argument("draft", required=False)
@click.option("--only", "only", multiple=True, help="Generators to plan (repeatable or comma-separated).")
@click.option("--force", is_flag=True, help="Plan as if --force were given to build.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan(ctx: click.Context, draft: str | None, only: tuple[str, ...], force: bool, as_json: bool) -> None:
    """Show what a build would write, skip or warn about."""
    from architect.core.use_cases.build import plan as run_plan

    ctx.obj["as_json"] = as_json
    result = run_plan(draft, only=_only(only), force=force, settings=_settings(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.success else 1)

    if not result.success:
        click.secho("❌ Plan failed:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")
        sys.exit(1)

    if result.would_short_circuit:
        click.secho("✓ Draft unchanged: a build would do nothing", fg="green")
        return

    click.secho(f"\n📋 Plan for {result.draft_path}", fg="cyan", bold=True)
    symbols = {"write": ("✎", "green"), "skip": ("⊘", "white"), "warn": ("⚠", "yellow")}
    for action in result.actions:
        symbol, color = symbols[action.decision.value]
        click.secho(f"   {symbol} {action.decision.value:<5}", fg=color, nl=False)
        click.echo(f" {action.path}  ({action.reason})")
    click.echo()


@cli.command()
@click.argument("draft", required=False)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def validate(ctx: click.Context, draft: str | None, as_json: bool) -> None:
    """Validate a draft without generating anything."""
    from architect.core.use_cases.validate import validate as run_validate

    ctx.obj["as_json"] = as_json
    errors = run_validate(draft, settings=_settings(ctx))

    if as_json:
        click.echo(json.dumps({"valid": not errors, "errors": errors}, indent=2))
        sys.exit(0 if not errors else 1)

    if errors:
        click.secho("❌ Draft errors:", fg="red", bold=True)
        for err in errors:
            click.echo(f"   • {err}")
        sys.exit(1)

    click.secho("✅ Draft is valid", fg="green", bold=True)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show the state ledger summary."""
    from architect.core.use_cases.status import get_status

    ctx.obj["as_json"] = as_json
    result = get_status(settings=_settings(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if not result.error else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    state = result.state
    assert state is not None

    click.secho(f"\n📋 Ledger: {result.state_path}", fg="cyan", bold=True)
    click.echo(f"   Last run: {state.last_run or 'never'}")
    click.echo(f"   Files: {result.file_count}")
    for ownership, count in result.counts_by_ownership().items():
        click.echo(f"     • {ownership}: {count}")

    if result.draft_changed is None:
        click.secho(f"   Draft: {result.draft_path} (missing)", fg="yellow")
    elif result.draft_changed:
        click.secho(f"   Draft: {result.draft_path} (changed, rebuild pending)", fg="yellow")
    else:
        click.secho(f"   Draft: {result.draft_path} (up to date)", fg="green")

    if state.last_build_backup:
        click.echo(f"   Revertible: {len(state.last_build_backup)} file(s)")

    if result.recent_builds:
        click.echo()
        click.secho("   Recent builds:", fg="white", bold=True)
        colors = {"ok": "green", "no_changes": "white", "failed": "red"}
        for entry in result.recent_builds:
            click.echo(f"     {entry.timestamp}  ", nl=False)
            click.secho(f"{entry.status:<10}", fg=colors.get(entry.status, "white"), nl=False)
            click.echo(f" {len(entry.written)} written")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def revert(ctx: click.Context, as_json: bool) -> None:
    """Restore files touched by the last successful build."""
    from architect.core.use_cases.build import revert as run_revert

    ctx.obj["as_json"] = as_json
    result = run_revert(settings=_settings(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.success else 1)

    if result.nothing_to_revert:
        click.echo("Nothing to revert.")
        return

    for path in result.restored:
        click.secho("   ↺ ", fg="green", nl=False)
        click.echo(path)
    for path in result.deleted:
        click.secho("   ✗ ", fg="yellow", nl=False)
        click.echo(path)
    for err in result.errors:
        click.secho(f"   ❌ {err}", fg="red")

    if not result.success:
        sys.exit(1)


@cli.command()
@click.argument("description")
@click.option("--existing", "existing", default=None, help="Draft to extend.")
@click.option("--output", "-o", "output", default=None, help="Write the draft to this file.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def draft(
    ctx: click.Context,
    description: str,
    existing: str | None,
    output: str | None,
    as_json: bool,
) -> None:
    """Generate a draft from a description."""
    from architect.core.use_cases.draft import draft as run_draft

    ctx.obj["as_json"] = as_json
    result = run_draft(description, existing_draft_path=existing, output=output, settings=_settings(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if not result.error else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if result.output:
        click.secho(f"✓ Draft written to {result.output} ({result.source})", fg="green")
    else:
        click.echo(result.yaml, nl=False)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
