"""End-to-end provisioning run.

Stages run strictly in order and each one's output feeds the next:

1. topic: create (or reuse) the SNS topic and subscribe the email address
2. identity: resolve the caller's account id
3. policy: let AWS Budgets publish to the topic
4. budget: create, keep, or replace the named budget

A failure aborts the run where it happens. Nothing is rolled back; every
stage is idempotent, so the whole run can simply be repeated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .clients import AwsClients
from .config import BUDGETS_CONSOLE_URL, ProvisionConfig
from .policy import install_policy
from .reconciler import BudgetReconciler, ReconcileResult
from .templates import ACCESS_POLICY_TEMPLATE, TemplateSet
from .topic import TopicProvisioner
from .validation import ValidatedInputs

logger = logging.getLogger(__name__)


@dataclass
class ProvisionResult:
    """Identifiers resolved and the budget outcome of one run."""

    topic_arn: str
    subscription_arn: str
    account_id: str
    budget: ReconcileResult


class BudgetAlarmProvisioner:
    """
    Runs the provisioning stages against one AWS account.

    Example:
        config = ProvisionConfig.from_env()
        provisioner = BudgetAlarmProvisioner(config, echo=click.echo)
        provisioner.run(validate_inputs("50", "ops@example.com"))

    Attributes:
        config: Region, topic name, template directory, replace flag
        clients: boto3 clients (built from config when not given)
        templates: Template files (read from config.template_dir when not given)
        echo: Receives the human-readable progress lines
    """

    def __init__(
        self,
        config: ProvisionConfig,
        clients: AwsClients | None = None,
        templates: TemplateSet | None = None,
        echo: Callable[[str], None] = logger.info,
    ) -> None:
        self.config = config
        self.clients = clients or AwsClients.from_config(config)
        self.templates = templates or TemplateSet(config.template_dir)
        self.echo = echo

    def run(self, inputs: ValidatedInputs) -> ProvisionResult:
        """
        Provision the topic, subscription, policy and budget.

        Args:
            inputs: Validated budget amount and email address

        Returns:
            ProvisionResult describing what was resolved and done

        Raises:
            ConfigurationError: If a template needed by a stage is missing
            RemoteCallError: If any AWS call fails
        """
        config = self.config
        topics = TopicProvisioner(self.clients.sns, self.clients.sts)

        self.echo(f"Creating SNS topic '{config.topic_name}' in region '{config.region}'...")
        topic_arn = topics.create_or_get_topic(config.topic_name)
        self.echo(f"SNS Topic ARN: {topic_arn}")

        self.echo(f"Subscribing email address '{inputs.email}' to topic '{config.topic_name}'...")
        subscription_arn = topics.subscribe(topic_arn, inputs.email)
        self.echo(f"Subscription: {subscription_arn}")

        self.echo("Getting AWS account ID...")
        account_id = topics.get_account_id()
        self.echo(f"Account ID: {account_id}")

        # Checked here, not up front, so the earlier stages still complete
        policy_template = self.templates.load(ACCESS_POLICY_TEMPLATE)
        self.echo("Updating SNS topic policy to allow AWS Budgets to publish notifications...")
        install_policy(self.clients.sns, topic_arn, account_id, policy_template)

        reconciler = BudgetReconciler(self.clients.budgets, self.templates, self.echo)
        budget = reconciler.reconcile(
            account_id,
            topic_arn,
            inputs.budget_amount,
            replace=config.replace,
        )

        if not budget.skipped:
            self.echo("AWS Budget and notifications set up successfully!")
            self.echo("You can view your budget here:")
            self.echo(f"  {BUDGETS_CONSOLE_URL}")

        logger.debug("Budget %s: %s %s", budget.budget_name, budget.state.value, budget.actions)
        return ProvisionResult(
            topic_arn=topic_arn,
            subscription_arn=subscription_arn,
            account_id=account_id,
            budget=budget,
        )
