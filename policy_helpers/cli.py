"""CLI entry point for policy-helpers."""

import importlib
import json
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

load_dotenv()

from policy_helpers.decision.catalog import load_catalog
from policy_helpers.decision.codec import RAW_TYPE_DENY, decode_severity
from policy_helpers.decision.raw import dump_result

logger = logging.getLogger(__name__)


def _load_target(target: str, app_dir: Path):
    """Import `module:attribute` and return the attribute."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"Expected 'module:attribute', got '{target}'", param_hint="TARGET")

    app_dir_str = str(app_dir.resolve())
    if app_dir_str not in sys.path:
        sys.path.insert(0, app_dir_str)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Could not import module '{module_name}': {e}", param_hint="TARGET") from e

    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise click.BadParameter(f"'{module_name}' has no attribute '{attr}'", param_hint="TARGET") from None

    if not callable(obj):
        raise click.BadParameter(f"'{target}' is not callable", param_hint="TARGET")
    return obj


@click.group()
@click.option(
    "--log-level",
    envvar="POLICY_HELPERS_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level (or set POLICY_HELPERS_LOG_LEVEL).",
)
def main(log_level: str):
    """Policy Helpers — run raw decision policies and browse decision kinds."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )


@main.command()
@click.argument("target")
@click.option("--input", "-i", "input_file", type=click.File("r"), default="-", help="JSON file holding the query result (default: stdin).")
@click.option("--data", "-d", "data_json", default=None, help="JSON string of policy parameters.")
@click.option("--app-dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=Path("."), help="Directory to import TARGET from (default: current directory).")
@click.option("--indent", type=int, default=2, help="Indentation of the JSON output.")
def run(target: str, input_file, data_json: str | None, app_dir: Path, indent: int):
    """Invoke a raw policy the way a host runtime does.

    TARGET is 'module:attribute' naming a policy produced by
    wrap_decision_policy. Prints {"result": [...]} as JSON.
    Exit code 0 if no decision denies, 2 otherwise.

    \b
    Examples:
        policy-helpers run my_policy:policy -i input.json
        policy-helpers run my_policy:policy -i input.json -d '{"resource_exceptions": ["*"]}'
    """
    raw_policy = _load_target(target, app_dir)

    try:
        raw_input = json.load(input_file)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON for --input: {e}") from e

    data = None
    if data_json:
        try:
            data = json.loads(data_json)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"Invalid JSON for --data: {e}") from e

    logger.info("Invoking %s", target)
    result = raw_policy(raw_input, data)

    denied = [d for d in result["result"] if d.header.type == RAW_TYPE_DENY]
    for d in denied:
        logger.info("Denied %s (%s, severity %s)", d.header.subject, d.header.kind, decode_severity(d.header.severity).value)

    click.echo(dump_result(result, indent=indent))
    raise SystemExit(2 if denied else 0)


@main.group("kinds")
def kinds_group():
    """Browse the bundled decision kinds."""


@kinds_group.command("list")
def kinds_list():
    """List all bundled decision kinds.

    \b
    Example:
        policy-helpers kinds list
    """
    catalog = load_catalog()
    if not catalog:
        click.echo("No bundled decision kinds found.")
        return

    for name, kind in catalog.items():
        click.echo(f"  {name:<55} {kind.default_severity.value:<8} — {kind.description}")


@kinds_group.command("show")
@click.argument("name")
def kinds_show(name: str):
    """Show a decision kind: description, default severity, annotations.

    NAME is the kind (e.g. 'aws_alb_logging').
    """
    kind = load_catalog().get(name)
    if kind is None:
        click.echo(f"Kind '{name}' not found. Run 'policy-helpers kinds list' to see available kinds.")
        raise SystemExit(1)

    sev = kind.default_severity.value
    sev_color = {"critical": "red", "high": "yellow", "medium": "cyan", "low": "green"}.get(sev, "white")
    click.echo(f"\n  {kind.kind}  {click.style(f'[{sev}]', fg=sev_color)}")
    click.echo(f"  {kind.description}")
    click.echo(f"  api_version: {kind.api_version}\n")

    for key, value in kind.annotations.items():
        click.echo(f"  {key} = {value}")
    click.echo("")


if __name__ == "__main__":
    main()
