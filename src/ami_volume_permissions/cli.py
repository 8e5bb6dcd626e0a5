#!/usr/bin/env python3
"""
AMI Volume Permissions - CLI
Post-build step copying AMI launch permissions to the AMI's EBS snapshots
"""

import click

from ami_volume_permissions import __version__
from .utils.decorators import aws_operation
from ami_volume_permissions.utils.logger import set_log_level, setup_logger


def setup_logging(verbose: bool = False):
    # --verbose lowers every package logger to DEBUG, console included
    set_log_level("DEBUG" if verbose else None)
    logger = setup_logger("ami_volume_permissions.cli", "cli.log")
    logger.debug("Verbose logging enabled")
    return logger


# Access options, mirroring the settings file's aws section
def add_access_options(func):
    func = click.option("--access-key", help="AWS access key id")(func)
    func = click.option("--secret-key", help="AWS secret access key")(func)
    func = click.option("--token", help="AWS session token")(func)
    func = click.option(
        "--skip-region-validation",
        is_flag=True,
        help="Do not check the region against known EC2 regions",
    )(func)
    return func


@click.group()
@click.option("--region", help="AWS region (defaults to settings, then the artifact's region)")
@click.option("--profile", help="AWS shared credentials profile")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    help="Directory holding settings.yaml",
)
@click.pass_context
def cli(ctx, region, profile, config_dir):
    """AMI Volume Permissions - share AMI snapshots with AMI launch principals"""
    ctx.ensure_object(dict)

    ctx.obj["region"] = region
    ctx.obj["profile"] = profile
    ctx.obj["config_dir"] = config_dir


@cli.command()
@click.argument("artifact_id")
@click.option("--output", type=click.Path(), help="Write the JSON summary to this file")
@click.option("--dry-run", is_flag=True, help="Report snapshot updates without applying them")
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@add_access_options
@click.pass_context
@aws_operation()
def propagate(
    ctx,
    artifact_id,
    output,
    dry_run,
    verbose,
    access_key,
    secret_key,
    token,
    skip_region_validation,
):
    """Copy the launch permissions of ARTIFACT_ID's AMI to its EBS snapshots

    ARTIFACT_ID is the builder's artifact id, e.g. ap-southeast-2:ami-4f8fae2c.
    """
    setup_logging(verbose)


@cli.command()
def version():
    """Show version information"""
    click.echo(f"AMI Volume Permissions {__version__}")


if __name__ == "__main__":
    cli()
