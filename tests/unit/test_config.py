"""Tests for run configuration and client construction."""

from pathlib import Path
from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError, NoCredentialsError

from aws_budget_alarm.clients import AwsClients, remote_call, require_field
from aws_budget_alarm.config import ProvisionConfig
from aws_budget_alarm.exceptions import (
    BudgetAlarmError,
    ConfigurationError,
    InvalidEndpointError,
    RemoteCallError,
)
from aws_budget_alarm.templates import TEMPLATE_DIR


class TestProvisionConfig:
    """Tests for ProvisionConfig defaults and environment handling."""

    def test_defaults(self) -> None:
        config = ProvisionConfig()
        assert config.region == "us-east-1"
        assert config.topic_name == "AWS_Charges"
        assert config.endpoint_url is None
        assert config.template_dir == TEMPLATE_DIR
        assert config.replace is False

    @pytest.mark.parametrize("value,expected", [("1", True), ("yes", True), ("", False)])
    def test_replace_from_env(self, monkeypatch, value: str, expected: bool) -> None:
        """Any non-empty REPLACE_BUDGET enables replacement."""
        monkeypatch.setenv("REPLACE_BUDGET", value)
        assert ProvisionConfig.from_env().replace is expected

    def test_replace_unset(self, monkeypatch) -> None:
        monkeypatch.delenv("REPLACE_BUDGET", raising=False)
        assert ProvisionConfig.from_env().replace is False

    def test_endpoint_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("AWS_ENDPOINT_URL", "http://localhost:4566")
        assert ProvisionConfig.from_env().endpoint_url == "http://localhost:4566"

    def test_overrides_win_and_none_is_ignored(self, monkeypatch) -> None:
        monkeypatch.setenv("REPLACE_BUDGET", "1")
        config = ProvisionConfig.from_env(
            replace=False, region=None, topic_name="Alerts", template_dir="/tmp/t"
        )
        assert config.replace is False
        assert config.region == "us-east-1"
        assert config.topic_name == "Alerts"
        assert config.template_dir == Path("/tmp/t")


class TestAwsClients:
    """Tests for boto3 client construction."""

    def test_from_config_passes_region_and_endpoint(self) -> None:
        config = ProvisionConfig(region="eu-west-1", endpoint_url="http://localhost:4566")
        with patch("aws_budget_alarm.clients.boto3") as mock_boto3:
            clients = AwsClients.from_config(config)

        session = mock_boto3.Session.return_value
        services = [c[0][0] for c in session.client.call_args_list]
        assert services == ["sns", "sts", "budgets"]
        for call in session.client.call_args_list:
            assert call[1] == {"region_name": "eu-west-1", "endpoint_url": "http://localhost:4566"}
        assert clients.sns is session.client.return_value

    def test_from_config_without_endpoint(self) -> None:
        with patch("aws_budget_alarm.clients.boto3") as mock_boto3:
            AwsClients.from_config(ProvisionConfig())

        session = mock_boto3.Session.return_value
        assert "endpoint_url" not in session.client.call_args[1]

    def test_unknown_profile_is_remote_call_error(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
        monkeypatch.setenv("AWS_PROFILE", "does-not-exist-xyz")
        with pytest.raises(RemoteCallError) as exc_info:
            AwsClients.from_config(ProvisionConfig())
        assert exc_info.value.operation == "boto3:Session"
        assert "does-not-exist-xyz" in str(exc_info.value)

    def test_malformed_endpoint_is_configuration_error(self) -> None:
        with pytest.raises(InvalidEndpointError) as exc_info:
            AwsClients.from_config(ProvisionConfig(endpoint_url="not a url"))
        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.endpoint_url == "not a url"
        assert "not a url" in str(exc_info.value)


class TestRemoteCall:
    """Tests for botocore error translation."""

    def test_client_error(self) -> None:
        error = ClientError({"Error": {"Code": "Throttling", "Message": "slow"}}, "Subscribe")
        with pytest.raises(RemoteCallError) as exc_info:
            with remote_call("sns:Subscribe"):
                raise error
        assert exc_info.value.cause is error
        assert str(exc_info.value).startswith("sns:Subscribe failed:")
        assert isinstance(exc_info.value, BudgetAlarmError)

    def test_botocore_error(self) -> None:
        with pytest.raises(RemoteCallError):
            with remote_call("sts:GetCallerIdentity"):
                raise NoCredentialsError()

    def test_other_errors_propagate(self) -> None:
        with pytest.raises(KeyError):
            with remote_call("sns:CreateTopic"):
                raise KeyError("x")

    def test_require_field(self) -> None:
        assert require_field("op", {"Account": "1"}, "Account") == "1"
        with pytest.raises(RemoteCallError, match="missing 'Account'"):
            require_field("op", {"Account": ""}, "Account")
