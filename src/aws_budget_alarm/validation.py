"""Command-line input validation.

Budget amounts must be 0.01 - 9999.99 USD with at most two decimal places.
The email address falls back to ``git config user.email`` when not given.
Nothing in this module talks to AWS.
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from .exceptions import InvalidBudgetError, MissingEmailError

logger = logging.getLogger(__name__)

# 1-4 integer digits, optional decimal point with 1-2 fraction digits
BUDGET_PATTERN = re.compile(r"^\d{1,4}(\.\d{1,2})?$", re.ASCII)


@dataclass(frozen=True)
class ValidatedInputs:
    """Normalized command-line inputs."""

    budget_amount: str
    email: str


def validate_budget(raw: str) -> str:
    """
    Validate a budget amount string.

    Args:
        raw: Amount as given on the command line (e.g. "50", "12.5")

    Returns:
        The amount, unchanged

    Raises:
        InvalidBudgetError: If the amount does not match the budget pattern
    """
    # fullmatch so a trailing newline is rejected too
    if not BUDGET_PATTERN.fullmatch(raw):
        raise InvalidBudgetError(raw)
    return raw


def git_config_email() -> str | None:
    """Return ``git config user.email``, or None if git or the value is unavailable."""
    try:
        result = subprocess.run(
            ["git", "config", "user.email"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.debug("Could not run git to determine email: %s", e)
        return None

    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_email(
    raw: str | None,
    fallback: Callable[[], str | None] | None = None,
) -> str:
    """
    Resolve the email address to subscribe.

    A non-empty argument is used verbatim; the fallback is only consulted
    when the argument is missing or empty.

    Raises:
        MissingEmailError: If neither source yields an address
    """
    if raw:
        return raw

    email = (fallback or git_config_email)()
    if not email:
        raise MissingEmailError()
    logger.debug("Using email from git config: %s", email)
    return email


def validate_inputs(
    budget: str,
    email: str | None,
    fallback: Callable[[], str | None] | None = None,
) -> ValidatedInputs:
    """Validate the budget amount, then resolve the email address."""
    return ValidatedInputs(
        budget_amount=validate_budget(budget),
        email=resolve_email(email, fallback),
    )
