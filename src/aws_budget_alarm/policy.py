"""Topic access policy installation."""

from __future__ import annotations

import json
import logging
from typing import Any

from .clients import remote_call
from .templates import (
    ACCOUNT_ID_PLACEHOLDER,
    TOPIC_ARN_PLACEHOLDER,
    render_json,
)

logger = logging.getLogger(__name__)


def render_policy(template: str, topic_arn: str, account_id: str) -> str:
    """Render the access policy and return it as a compact JSON string."""
    document = render_json(
        "access policy",
        template,
        {
            TOPIC_ARN_PLACEHOLDER: topic_arn,
            ACCOUNT_ID_PLACEHOLDER: account_id,
        },
    )
    return json.dumps(document)


def install_policy(sns: Any, topic_arn: str, account_id: str, template: str) -> None:
    """
    Attach the access policy that lets AWS Budgets publish to the topic.

    The policy attribute is overwritten as a whole; any policy previously
    attached to the topic is replaced, not merged.

    Args:
        sns: boto3 SNS client
        topic_arn: Topic to attach the policy to
        account_id: Account that owns the topic and the budget
        template: Raw access policy template text

    Raises:
        ConfigurationError: If the template cannot be fully rendered
        RemoteCallError: If SetTopicAttributes fails
    """
    # Rendered before the call so a bad template never reaches SNS
    policy = render_policy(template, topic_arn, account_id)

    with remote_call("sns:SetTopicAttributes"):
        sns.set_topic_attributes(
            TopicArn=topic_arn,
            AttributeName="Policy",
            AttributeValue=policy,
        )
    logger.debug("Installed access policy on %s", topic_arn)
