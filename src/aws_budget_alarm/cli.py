"""Command-line interface for aws-budget-alarm."""

import logging
import sys
from typing import Any

import click

from .config import DEFAULT_BUDGET_AMOUNT, DEFAULT_REGION, DEFAULT_TOPIC_NAME, ProvisionConfig
from .exceptions import BudgetAlarmError, UsageError
from .provisioner import BudgetAlarmProvisioner
from .validation import validate_inputs


class BudgetAlarmCommand(click.Command):
    """Click command whose usage errors exit with status 1 instead of 2."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command(cls=BudgetAlarmCommand)
@click.version_option(package_name="aws-budget-alarm")
@click.argument("budget_amount", required=False, default=DEFAULT_BUDGET_AMOUNT)
@click.argument("email_address", required=False)
@click.option(
    "--region",
    default=DEFAULT_REGION,
    show_default=True,
    help="AWS region for the SNS topic",
)
@click.option(
    "--topic-name",
    default=DEFAULT_TOPIC_NAME,
    show_default=True,
    help="SNS topic that receives budget notifications",
)
@click.option(
    "--endpoint-url",
    help=(
        "AWS endpoint URL "
        "(e.g., http://localhost:4566 for LocalStack, or other AWS-compatible services)"
    ),
)
@click.option(
    "--template-dir",
    type=click.Path(file_okay=False),
    help="Directory with the JSON templates (default: templates shipped with the package)",
)
@click.option(
    "--replace/--no-replace",
    default=None,
    help="Delete and recreate an existing budget (default: set when REPLACE_BUDGET is non-empty)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log AWS calls at debug level")
@click.pass_context
def cli(
    ctx: click.Context,
    budget_amount: str,
    email_address: str | None,
    region: str,
    topic_name: str,
    endpoint_url: str | None,
    template_dir: str | None,
    replace: bool | None,
    verbose: bool,
) -> None:
    """Create an AWS Budget that emails EMAIL_ADDRESS through SNS.

    BUDGET_AMOUNT is the monthly limit in USD (0.01 - 9999.99, default 0.01).
    EMAIL_ADDRESS defaults to `git config user.email`.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    try:
        inputs = validate_inputs(budget_amount, email_address)
    except UsageError as e:
        raise click.UsageError(str(e), ctx) from e

    overrides: dict[str, Any] = {
        "region": region,
        "topic_name": topic_name,
        "endpoint_url": endpoint_url,
        "template_dir": template_dir,
        "replace": replace,
    }
    config = ProvisionConfig.from_env(**overrides)

    try:
        BudgetAlarmProvisioner(config, echo=click.echo).run(inputs)
    except BudgetAlarmError as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
