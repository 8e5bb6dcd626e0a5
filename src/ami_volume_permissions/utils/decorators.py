"""Decorator patterns for post-process CLI operations."""

import json
from functools import wraps
from typing import Any, Callable, Dict, Optional, Type

import click

from ami_volume_permissions.jobs.base import BaseJob
from ami_volume_permissions.jobs.propagate_permissions import PropagatePermissionsJob
from ami_volume_permissions.utils.config import ConfigManager
from ami_volume_permissions.utils.exceptions import AmiPermissionsError, SyncError
from ami_volume_permissions.utils.logger import setup_logger
from ami_volume_permissions.utils.reporter import ProgressReporter

ACCESS_OPTIONS = (
    "region",
    "profile",
    "access_key",
    "secret_key",
    "token",
    "skip_region_validation",
)


def handle_operation_error(operation_name: str, error: Exception) -> None:
    """Centralized error handling for operations.

    Args:
        operation_name: Name of the operation that failed
        error: Exception that occurred
    """
    error_msg = f"Error in {operation_name}: {str(error)}"
    click.echo(error_msg, err=True)

    if isinstance(error, SyncError) and error.report is not None:
        report = error.report
        click.echo(
            f"Snapshots already updated: {', '.join(report.applied_snapshot_ids) or 'none'}",
            err=True,
        )
        click.echo(
            f"Snapshots not updated: {', '.join(report.pending_snapshot_ids) or 'none'}",
            err=True,
        )

    logger = setup_logger("ami_volume_permissions.errors")
    logger.error(
        error_msg,
        extra={"operation": operation_name, "error_type": type(error).__name__},
    )


def handle_output(
    result: Any,
    output_path: Optional[str] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """Print the run summary as JSON, or save it to ``output_path``."""
    logger = setup_logger("ami_volume_permissions.output", "operations.log")

    data = result.to_dict() if hasattr(result, "to_dict") else result
    text = json.dumps(data, indent=2, default=str)

    logger.info(f"[{correlation_id or 'N/A'}] Operation completed: {type(result).__name__}")

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Results saved to {output_path}")
        logger.info(f"[{correlation_id or 'N/A'}] Results saved to {output_path}")
    else:
        click.echo(text)


def build_access_config(config: ConfigManager, options: Dict[str, Any]):
    """Settings from the config file, overridden by CLI options."""
    overrides = {key: options.get(key) for key in ACCESS_OPTIONS}
    if not overrides.get("skip_region_validation"):
        overrides["skip_region_validation"] = None
    return config.get_access_config().merged(**overrides)


def aws_operation(job_class: Type[BaseJob] = PropagatePermissionsJob):
    """Decorator running a post-process job for a click command.

    The command receives ``ctx`` plus its options; the decorated body runs
    first (for logging setup), then the job is executed for ``artifact_id``.
    Failures are reported and turned into exit status 1.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(ctx, **kwargs):
            operation_name = func.__name__
            func(ctx, **kwargs)

            options = dict(ctx.obj or {})
            options.update({k: v for k, v in kwargs.items() if v is not None})

            config = ConfigManager(options.get("config_dir"))
            job = job_class(
                config_manager=config,
                access_config=build_access_config(config, options),
                reporter=ProgressReporter(sink=click.echo),
            )

            if kwargs.get("dry_run", False):
                click.echo(f"[DRY RUN] {operation_name} will not modify any snapshot")

            try:
                result = job.execute(
                    kwargs["artifact_id"], dry_run=kwargs.get("dry_run", False)
                )
            except AmiPermissionsError as e:
                handle_operation_error(operation_name, e)
                ctx.exit(1)

            handle_output(result, kwargs.get("output"), job.correlation_id)
            return result

        return wrapper

    return decorator
