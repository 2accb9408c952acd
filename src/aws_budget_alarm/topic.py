"""SNS topic provisioning and caller identity lookup."""

from __future__ import annotations

import logging
from typing import Any

from .clients import remote_call, require_field

logger = logging.getLogger(__name__)


class TopicProvisioner:
    """
    Creates the notification topic and subscribes an email address to it.

    Every operation is safe to repeat: CreateTopic returns the existing ARN
    for a name that already exists, and SNS deduplicates subscriptions for
    the same endpoint.

    Attributes:
        sns: boto3 SNS client
        sts: boto3 STS client
    """

    def __init__(self, sns: Any, sts: Any) -> None:
        self.sns = sns
        self.sts = sts

    def create_or_get_topic(self, name: str) -> str:
        """
        Create the topic, or return the ARN of the existing one.

        Args:
            name: Topic name

        Returns:
            The topic ARN

        Raises:
            RemoteCallError: If the call fails or no ARN is returned
        """
        with remote_call("sns:CreateTopic"):
            response = self.sns.create_topic(Name=name)
        topic_arn = require_field("sns:CreateTopic", response, "TopicArn")
        logger.debug("Topic %s resolved to %s", name, topic_arn)
        return topic_arn

    def subscribe(self, topic_arn: str, email: str) -> str:
        """
        Request an email subscription to the topic.

        Returns as soon as SNS accepts the request. The subscription stays
        pending until the recipient follows the confirmation link, which
        happens outside this program; nothing here waits for it.

        Returns:
            The subscription ARN ("pending confirmation" until confirmed)
        """
        with remote_call("sns:Subscribe"):
            response = self.sns.subscribe(
                TopicArn=topic_arn,
                Protocol="email",
                Endpoint=email,
            )
        return response.get("SubscriptionArn") or "pending confirmation"

    def get_account_id(self) -> str:
        """Return the account id of the calling identity."""
        with remote_call("sts:GetCallerIdentity"):
            response = self.sts.get_caller_identity()
        return require_field("sts:GetCallerIdentity", response, "Account")
