"""boto3 client construction and remote error translation."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import ProvisionConfig
from .exceptions import InvalidEndpointError, RemoteCallError

logger = logging.getLogger(__name__)


@dataclass
class AwsClients:
    """The three AWS service clients a provisioning run needs."""

    sns: Any
    sts: Any
    budgets: Any

    @classmethod
    def from_config(cls, config: ProvisionConfig) -> AwsClients:
        """
        Create clients from one boto3 session.

        Credentials come from boto3's default resolution chain.

        Args:
            config: Provides the region and optional endpoint URL

        Raises:
            RemoteCallError: If botocore cannot set up the session (e.g. unknown profile)
            InvalidEndpointError: If botocore rejects the endpoint URL
        """
        kwargs: dict[str, Any] = {"region_name": config.region}
        if config.endpoint_url:
            kwargs["endpoint_url"] = config.endpoint_url

        with remote_call("boto3:Session"):
            session = boto3.Session()
            try:
                return cls(
                    sns=session.client("sns", **kwargs),
                    sts=session.client("sts", **kwargs),
                    budgets=session.client("budgets", **kwargs),
                )
            except ValueError as e:
                # InvalidRegionError is also a ValueError
                if not config.endpoint_url or isinstance(e, BotoCoreError):
                    raise
                raise InvalidEndpointError(config.endpoint_url, str(e)) from e


@contextmanager
def remote_call(operation: str) -> Iterator[None]:
    """
    Translate botocore failures inside the block into RemoteCallError.

    Example:
        with remote_call("sns:CreateTopic"):
            response = sns.create_topic(Name="AWS_Charges")
    """
    logger.debug("Calling %s", operation)
    try:
        yield
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "Unknown")
        logger.debug("%s returned error code %s", operation, code)
        raise RemoteCallError(operation, e) from e
    except BotoCoreError as e:
        raise RemoteCallError(operation, e) from e


def require_field(operation: str, response: dict[str, Any], key: str) -> str:
    """Return a non-empty string field from a response, or fail as malformed."""
    value = response.get(key)
    if not value:
        raise RemoteCallError(operation, message=f"response is missing '{key}'")
    return str(value)
