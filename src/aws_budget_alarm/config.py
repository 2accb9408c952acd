"""Run configuration for aws-budget-alarm."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from .templates import TEMPLATE_DIR

DEFAULT_REGION = "us-east-1"
"""Region for the SNS topic. AWS Budgets is a global service homed in us-east-1."""

DEFAULT_TOPIC_NAME = "AWS_Charges"
"""Name of the SNS topic budget notifications are published to."""

DEFAULT_BUDGET_AMOUNT = "0.01"
"""Budget used when no amount is given on the command line."""

REPLACE_ENV_VAR = "REPLACE_BUDGET"
"""Any non-empty value enables delete-and-recreate of an existing budget."""

ENDPOINT_ENV_VAR = "AWS_ENDPOINT_URL"

BUDGETS_CONSOLE_URL = "https://console.aws.amazon.com/billing/home#/budgets/overview"


@dataclass(frozen=True)
class ProvisionConfig:
    """
    Settings shared by every provisioning stage.

    Attributes:
        region: AWS region for SNS and STS calls
        topic_name: SNS topic that receives budget notifications
        endpoint_url: Optional AWS endpoint (e.g. http://localhost:4566 for LocalStack)
        template_dir: Directory holding the JSON templates
        replace: Delete and recreate the budget if it already exists
    """

    region: str = DEFAULT_REGION
    topic_name: str = DEFAULT_TOPIC_NAME
    endpoint_url: str | None = None
    template_dir: Path = field(default=TEMPLATE_DIR)
    replace: bool = False

    @classmethod
    def from_env(cls, **overrides: object) -> ProvisionConfig:
        """
        Build a config from the environment, then apply explicit overrides.

        Overrides whose value is None are ignored so CLI options that were
        not given fall back to the environment or the defaults.
        """
        config = cls(
            endpoint_url=os.environ.get(ENDPOINT_ENV_VAR) or None,
            replace=bool(os.environ.get(REPLACE_ENV_VAR)),
        )
        given = {k: v for k, v in overrides.items() if v is not None}
        if "template_dir" in given:
            given["template_dir"] = Path(str(given["template_dir"]))
        return replace(config, **given)  # type: ignore[arg-type]
