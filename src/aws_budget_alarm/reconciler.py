"""Budget reconciliation.

The budget name is the natural key. Its state is observed once per run
from DescribeBudgets and mapped onto a fixed list of actions:

    ABSENT          -> create
    PRESENT_KEEP    -> (nothing)
    PRESENT_REPLACE -> delete, create
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from botocore.exceptions import ClientError

from .clients import remote_call
from .exceptions import TemplateFormatError
from .templates import (
    BUDGET_AMOUNT_PLACEHOLDER,
    BUDGET_TEMPLATE,
    NOTIFICATION_TEMPLATE,
    TOPIC_ARN_PLACEHOLDER,
    TemplateSet,
    render_json,
)

logger = logging.getLogger(__name__)


class BudgetState(Enum):
    """Observed state of the named budget."""

    ABSENT = "absent"
    PRESENT_KEEP = "present_keep"
    PRESENT_REPLACE = "present_replace"


ACTIONS: dict[BudgetState, tuple[str, ...]] = {
    BudgetState.ABSENT: ("create",),
    BudgetState.PRESENT_KEEP: (),
    BudgetState.PRESENT_REPLACE: ("delete", "create"),
}


@dataclass
class ReconcileResult:
    """Outcome of reconciling one budget."""

    budget_name: str
    state: BudgetState
    actions: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        """True when an existing budget was left in place."""
        return self.state is BudgetState.PRESENT_KEEP


def observe_state(budget_name: str, existing_names: list[str], replace: bool) -> BudgetState:
    """
    Derive the budget state from the names currently in the account.

    Matching is exact and case-sensitive; "MonthlyCharges-old" does not
    count as "MonthlyCharges".
    """
    if budget_name not in existing_names:
        return BudgetState.ABSENT
    return BudgetState.PRESENT_REPLACE if replace else BudgetState.PRESENT_KEEP


def read_budget_name(template: str) -> str:
    """Read ``BudgetName`` from the raw budget template."""
    try:
        document = json.loads(template)
    except json.JSONDecodeError as e:
        raise TemplateFormatError(BUDGET_TEMPLATE, str(e)) from e

    name = document.get("BudgetName") if isinstance(document, dict) else None
    if not name:
        raise TemplateFormatError(BUDGET_TEMPLATE, "'BudgetName' is missing or empty")
    return str(name)


def _log_echo(message: str) -> None:
    logger.info(message)


class BudgetReconciler:
    """
    Creates, keeps, or replaces the budget described by the templates.

    Attributes:
        budgets: boto3 Budgets client
        templates: Template files for the budget and its notifications
        echo: Receives one progress line before each action
    """

    def __init__(
        self,
        budgets: Any,
        templates: TemplateSet,
        echo: Callable[[str], None] = _log_echo,
    ) -> None:
        self.budgets = budgets
        self.templates = templates
        self.echo = echo

    def list_budget_names(self, account_id: str) -> list[str]:
        """Return the names of all budgets in the account."""
        names: list[str] = []
        with remote_call("budgets:DescribeBudgets"):
            paginator = self.budgets.get_paginator("describe_budgets")
            try:
                for page in paginator.paginate(AccountId=account_id):
                    names.extend(b["BudgetName"] for b in page.get("Budgets", []))
            except ClientError as e:
                # Accounts without any budget answer with NotFoundException
                if e.response["Error"]["Code"] != "NotFoundException":
                    raise
        logger.debug("Account %s has %d budget(s)", account_id, len(names))
        return names

    def delete_budget(self, account_id: str, budget_name: str) -> None:
        with remote_call("budgets:DeleteBudget"):
            self.budgets.delete_budget(AccountId=account_id, BudgetName=budget_name)

    def create_budget(
        self,
        account_id: str,
        budget: dict[str, Any],
        notifications: list[dict[str, Any]],
    ) -> None:
        with remote_call("budgets:CreateBudget"):
            self.budgets.create_budget(
                AccountId=account_id,
                Budget=budget,
                NotificationsWithSubscribers=notifications,
            )

    def render_documents(
        self, budget_amount: str, topic_arn: str
    ) -> tuple[str, dict[str, Any], list[dict[str, Any]]]:
        """
        Load and render the budget and notification templates.

        Returns:
            Tuple of (budget name, budget document, notifications list)
        """
        budget_template = self.templates.load(BUDGET_TEMPLATE)
        budget_name = read_budget_name(budget_template)
        budget = render_json(
            BUDGET_TEMPLATE,
            budget_template,
            {BUDGET_AMOUNT_PLACEHOLDER: budget_amount},
        )

        notifications = render_json(
            NOTIFICATION_TEMPLATE,
            self.templates.load(NOTIFICATION_TEMPLATE),
            {TOPIC_ARN_PLACEHOLDER: topic_arn},
        )
        if not isinstance(notifications, list):
            raise TemplateFormatError(NOTIFICATION_TEMPLATE, "expected a JSON list")

        return budget_name, budget, notifications

    def reconcile(
        self,
        account_id: str,
        topic_arn: str,
        budget_amount: str,
        replace: bool = False,
    ) -> ReconcileResult:
        """
        Bring the named budget to the desired state.

        Both templates are rendered before the first Budgets call, so a
        missing or broken template never leaves the budget deleted.

        Args:
            account_id: Account that owns the budget
            topic_arn: Topic notifications are sent to
            budget_amount: Monthly limit in USD, already validated
            replace: Delete and recreate an existing budget

        Returns:
            ReconcileResult with the observed state and actions taken

        Raises:
            ConfigurationError: If a template is missing or malformed
            RemoteCallError: If any Budgets API call fails
        """
        budget_name, budget, notifications = self.render_documents(budget_amount, topic_arn)

        self.echo("Checking for existing AWS Budgets...")
        existing = self.list_budget_names(account_id)
        state = observe_state(budget_name, existing, replace)
        result = ReconcileResult(budget_name=budget_name, state=state)

        if state is not BudgetState.ABSENT:
            self.echo(f"AWS Budget '{budget_name}' already exists.")

        for action in ACTIONS[state]:
            if action == "delete":
                self.echo(f"Deleting existing budget '{budget_name}' to replace it...")
                self.delete_budget(account_id, budget_name)
            elif action == "create":
                self.echo(
                    f"Creating AWS Budget with {budget_amount} USD budget and SNS notifications..."
                )
                self.create_budget(account_id, budget, notifications)
            else:
                raise ValueError(f"Unknown action: {action}")
            result.actions.append(action)

        if result.skipped:
            self.echo("Set REPLACE_BUDGET=1 to delete and recreate the budget.")

        return result
