"""
CLI entrypoint for the feature flag tenant editor.

Adds or removes tenant IDs on a named feature flag:

    flag-tenants "101, 202" add admin@example.com secret FREEMIUM_FEATURES
"""
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from flag_tenants.cli_output import print_critical_error
from flag_tenants.config.config import MonitoringConfig, load_config
from flag_tenants.constants import USAGE
from flag_tenants.exceptions import (
    AuthenticationError,
    FlagNotFoundError,
    NetworkError,
    ParseError,
    TenantFlagError,
    UsageError,
)
from flag_tenants.flags.tenant_editor import parse_tenant_ids
from flag_tenants.monitoring.logger import get_logger, setup_logging
from flag_tenants.workflow import TenantFlagWorkflow, WorkflowResult

app = typer.Typer(
    name="flag-tenants",
    help="Add or remove tenants on a feature flag",
    add_completion=False,
)

logger = get_logger(__name__)

ERROR_TITLES = {
    UsageError: "Usage error",
    AuthenticationError: "Login failed",
    NetworkError: "Request failed",
    ParseError: "Malformed response",
    FlagNotFoundError: "Feature flag not found",
}


def _error_title(error: TenantFlagError) -> str:
    for error_type, title in ERROR_TITLES.items():
        if isinstance(error, error_type):
            return title
    return "Tenant update failed"


def _report(result: WorkflowResult, dry_run: bool) -> None:
    if not result.changed:
        typer.echo("No changes in the feature flag payload. Skipping API call.")
    elif result.written:
        typer.echo(f"Successfully sent the feature flag payload for flag: {result.flag_name}")
        typer.echo(result.payload)
    elif dry_run:
        typer.echo(f"Dry run: payload not sent for flag: {result.flag_name}")
        typer.echo(result.payload)


@app.command()
def update(
    tenant_ids: Optional[str] = typer.Argument(None, help='Comma-separated tenant IDs, e.g. "101, 202,303"'),
    function: Optional[str] = typer.Argument(None, help="add or remove (case-insensitive)"),
    email: Optional[str] = typer.Argument(None, help="Login email"),
    password: Optional[str] = typer.Argument(None, help="Login password"),
    flag_name: Optional[str] = typer.Argument(None, help="Feature flag name, e.g. FREEMIUM_FEATURES"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show the change without sending it"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="json or text"),
):
    """
    Add or remove tenants on a feature flag, writing back only when the
    tenant list actually changes.

    Example:
        flag-tenants "10,20" add admin@example.com secret FREEMIUM_FEATURES
    """
    if None in (tenant_ids, function, email, password, flag_name):
        typer.echo(USAGE, err=True)
        raise typer.Exit(1)

    try:
        config = load_config(config_path)
        if log_level or log_format:
            overrides = {"log_level": (log_level or config.monitoring.log_level).upper()}
            if log_format:
                overrides["log_format"] = log_format.lower()
            config.monitoring = MonitoringConfig.model_validate(
                {**config.monitoring.model_dump(), **overrides}
            )
    except (FileNotFoundError, ValidationError) as e:
        print_critical_error("Invalid configuration", e)
        raise typer.Exit(1)

    if dry_run:
        config.dry_run = True

    setup_logging(config.monitoring.log_level, config.monitoring.log_format, config.monitoring.log_file)

    try:
        ids = parse_tenant_ids(tenant_ids)
    except UsageError as e:
        logger.error("Tenant IDs list is empty or invalid", tenant_ids=tenant_ids)
        print_critical_error(_error_title(e), e)
        raise typer.Exit(1)

    workflow = TenantFlagWorkflow(config)
    try:
        result = workflow.run(ids, function, email, password, flag_name)
    except TenantFlagError as e:
        logger.error("Tenant update failed", flag_name=flag_name, error=str(e))
        print_critical_error(_error_title(e), e)
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error during tenant update", flag_name=flag_name)
        print_critical_error("Unexpected error", e, include_traceback=True)
        raise typer.Exit(1)
    finally:
        workflow.close()

    _report(result, config.dry_run)
    logger.info(
        "Tenant update completed",
        flag_name=flag_name,
        operation=result.operation.value,
        changed=result.changed,
        written=result.written,
    )


if __name__ == "__main__":
    app()
