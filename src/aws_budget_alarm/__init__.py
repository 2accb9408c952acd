"""
aws-budget-alarm: email alerts for AWS spend.

Provisions, idempotently:
- an SNS topic with an email subscription
- a topic access policy that lets AWS Budgets publish to it
- a monthly cost budget whose notifications go to the topic

Example:
    from aws_budget_alarm import BudgetAlarmProvisioner, ProvisionConfig, validate_inputs

    provisioner = BudgetAlarmProvisioner(ProvisionConfig(replace=True))
    result = provisioner.run(validate_inputs("50", "ops@example.com"))
    print(result.topic_arn, result.budget.actions)
"""

from .clients import AwsClients
from .config import ProvisionConfig
from .exceptions import (
    BudgetAlarmError,
    ConfigurationError,
    InvalidBudgetError,
    InvalidEndpointError,
    MissingEmailError,
    RemoteCallError,
    TemplateFormatError,
    TemplateNotFoundError,
    UnresolvedPlaceholderError,
    UsageError,
)
from .provisioner import BudgetAlarmProvisioner, ProvisionResult
from .reconciler import BudgetReconciler, BudgetState, ReconcileResult
from .templates import TemplateSet, render
from .topic import TopicProvisioner
from .validation import ValidatedInputs, validate_inputs

__all__ = [
    "AwsClients",
    "BudgetAlarmError",
    "BudgetAlarmProvisioner",
    "BudgetReconciler",
    "BudgetState",
    "ConfigurationError",
    "InvalidBudgetError",
    "InvalidEndpointError",
    "MissingEmailError",
    "ProvisionConfig",
    "ProvisionResult",
    "ReconcileResult",
    "RemoteCallError",
    "TemplateFormatError",
    "TemplateNotFoundError",
    "TemplateSet",
    "TopicProvisioner",
    "UnresolvedPlaceholderError",
    "UsageError",
    "ValidatedInputs",
    "render",
    "validate_inputs",
]
