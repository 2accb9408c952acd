"""Exceptions for aws-budget-alarm."""

from pathlib import Path

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class BudgetAlarmError(Exception):
    """
    Base exception for all aws-budget-alarm errors.

    Every failure the provisioning run can report inherits from this class,
    so the CLI can map all of them to a single exit status.
    """

    pass


# ---------------------------------------------------------------------------
# Category Exceptions
# ---------------------------------------------------------------------------


class UsageError(BudgetAlarmError):
    """
    Base exception for malformed or missing command-line input.

    Raised before any remote call is made. The CLI reports these together
    with the usage text.
    """

    pass


class ConfigurationError(BudgetAlarmError):
    """
    Base exception for local configuration problems.

    This includes missing template files and templates that cannot be
    rendered into a complete document.
    """

    pass


class RemoteCallError(BudgetAlarmError):
    """
    Raised when an AWS API call fails or returns a malformed response.

    Remote failures are fatal: nothing is retried and no earlier stage is
    rolled back, since every stage is safe to re-run.

    Attributes:
        operation: The API operation that failed (e.g. ``sns:CreateTopic``)
        cause: The underlying botocore exception, if any
    """

    def __init__(
        self,
        operation: str,
        cause: Exception | None = None,
        message: str | None = None,
    ) -> None:
        self.operation = operation
        self.cause = cause
        detail = message or (str(cause) if cause is not None else "unknown error")
        super().__init__(f"{operation} failed: {detail}")


# ---------------------------------------------------------------------------
# Usage Exceptions
# ---------------------------------------------------------------------------


class InvalidBudgetError(UsageError):
    """Raised when the budget amount is not 0.01 - 9999.99 USD."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Invalid budget argument given: {value!r} - must be 0.01 - 9999.99 USD"
        )


class MissingEmailError(UsageError):
    """Raised when no email address was given and git config has none."""

    def __init__(self) -> None:
        super().__init__(
            "Email address not specified and could not determine email from git config"
        )


# ---------------------------------------------------------------------------
# Configuration Exceptions
# ---------------------------------------------------------------------------


class TemplateNotFoundError(ConfigurationError):
    """Raised when a required template file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Template file '{path}' not found.")


class TemplateFormatError(ConfigurationError):
    """Raised when a rendered template is not valid JSON."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Template '{name}' is not valid JSON: {reason}")


class UnresolvedPlaceholderError(ConfigurationError):
    """Raised when placeholders remain after rendering a template."""

    def __init__(self, name: str, placeholders: list[str]) -> None:
        self.name = name
        self.placeholders = placeholders
        super().__init__(
            f"Template '{name}' has unresolved placeholders: {', '.join(placeholders)}"
        )


class InvalidEndpointError(ConfigurationError):
    """Raised when botocore rejects the configured endpoint URL."""

    def __init__(self, endpoint_url: str, reason: str) -> None:
        self.endpoint_url = endpoint_url
        self.reason = reason
        super().__init__(f"Invalid endpoint URL '{endpoint_url}': {reason}")
