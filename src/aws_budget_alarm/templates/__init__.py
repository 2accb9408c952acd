"""JSON document templates and placeholder rendering.

Templates are plain JSON files with literal placeholder tokens. Rendering
is pure string substitution; a document that still contains a known
placeholder after rendering is never handed to AWS.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..exceptions import (
    TemplateFormatError,
    TemplateNotFoundError,
    UnresolvedPlaceholderError,
)

logger = logging.getLogger(__name__)

TOPIC_ARN_PLACEHOLDER = "<TOPIC_ARN_PLACEHOLDER>"
ACCOUNT_ID_PLACEHOLDER = "<ACCOUNT_ID_PLACEHOLDER>"
BUDGET_AMOUNT_PLACEHOLDER = "<BUDGET_AMOUNT_PLACEHOLDER>"

KNOWN_PLACEHOLDERS = (
    TOPIC_ARN_PLACEHOLDER,
    ACCOUNT_ID_PLACEHOLDER,
    BUDGET_AMOUNT_PLACEHOLDER,
)

ACCESS_POLICY_TEMPLATE = "aws_budget_sns_access_policy.json"
BUDGET_TEMPLATE = "aws_budget.json"
NOTIFICATION_TEMPLATE = "aws_budget_notification.json"

TEMPLATE_DIR = Path(__file__).parent


def render(template: str, bindings: Mapping[str, str]) -> str:
    """Replace every occurrence of each placeholder with its bound value."""
    rendered = template
    for placeholder, value in bindings.items():
        rendered = rendered.replace(placeholder, value)
    return rendered


def unresolved_placeholders(document: str) -> list[str]:
    """Return the known placeholders still present in a document."""
    return [p for p in KNOWN_PLACEHOLDERS if p in document]


def render_json(name: str, template: str, bindings: Mapping[str, str]) -> Any:
    """
    Render a template and parse the result as JSON.

    Args:
        name: Template name, used in error messages
        template: Raw template text
        bindings: Placeholder to value mapping

    Returns:
        The parsed JSON document

    Raises:
        UnresolvedPlaceholderError: If a known placeholder was left unbound
        TemplateFormatError: If the rendered text is not valid JSON
    """
    rendered = render(template, bindings)

    remaining = unresolved_placeholders(rendered)
    if remaining:
        raise UnresolvedPlaceholderError(name, remaining)

    try:
        return json.loads(rendered)
    except json.JSONDecodeError as e:
        raise TemplateFormatError(name, str(e)) from e


class TemplateSet:
    """
    Access to the template files in one directory.

    Files are read on demand so a missing template is only reported by the
    stage that needs it.
    """

    def __init__(self, directory: Path = TEMPLATE_DIR) -> None:
        self.directory = Path(directory)

    def path_for(self, name: str) -> Path:
        """Return the path of a template, failing if it does not exist."""
        path = self.directory / name
        if not path.is_file():
            raise TemplateNotFoundError(path)
        return path

    def load(self, name: str) -> str:
        """Read a template's raw text."""
        path = self.path_for(name)
        logger.debug("Loading template %s", path)
        return path.read_text()
