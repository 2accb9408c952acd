"""Pytest fixtures for aws-budget-alarm tests."""

import shutil
from pathlib import Path

import pytest
from moto import mock_aws

from aws_budget_alarm.templates import TEMPLATE_DIR


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    # Unset AWS_ENDPOINT_URL to ensure moto intercepts requests
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("REPLACE_BUDGET", raising=False)


@pytest.fixture
def mock_aws_services(aws_credentials):
    """Mock SNS, STS and Budgets for tests."""
    with mock_aws():
        yield


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A writable copy of the packaged templates."""
    target = tmp_path / "templates"
    target.mkdir()
    for template in TEMPLATE_DIR.glob("*.json"):
        shutil.copy(template, target / template.name)
    return target
