"""
Pytest configuration and shared fixtures for testing.
"""

import time
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from autoapt.core.aws_client import AWSClient


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mock AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def mock_aws_environment(aws_credentials):
    """Create a mocked AWS environment."""
    with mock_aws():
        yield


@pytest.fixture
def aws_client(mock_aws_environment):
    """Create an AWSClient instance for testing."""
    return AWSClient(region="us-east-1")


@pytest.fixture
def ec2_client(mock_aws_environment):
    """Create a boto3 EC2 client for setting up test resources."""
    return boto3.client("ec2", region_name="us-east-1")


@pytest.fixture
def vpc(ec2_client):
    """Create a VPC for testing."""
    response = ec2_client.create_vpc(CidrBlock="10.0.0.0/16")
    return response["Vpc"]["VpcId"]


@pytest.fixture
def subnet(ec2_client, vpc):
    """Create a subnet for testing."""
    response = ec2_client.create_subnet(
        VpcId=vpc,
        CidrBlock="10.0.1.0/24",
        AvailabilityZone="us-east-1a",
    )
    return response["Subnet"]["SubnetId"]


@pytest.fixture
def create_db_instance(mock_aws_environment):
    """Return a helper creating an RDS instance in a given region."""

    def _create(region, identifier, db_name=None, engine="postgres"):
        rds = boto3.client("rds", region_name=region)
        kwargs = {
            "DBInstanceIdentifier": identifier,
            "DBInstanceClass": "db.t3.micro",
            "Engine": engine,
            "AllocatedStorage": 20,
            "MasterUsername": "admin_user",
            "MasterUserPassword": "not-a-real-password",
        }
        if db_name:
            kwargs["DBName"] = db_name
        return rds.create_db_instance(**kwargs)["DBInstance"]

    return _create


# =============================================================================
# Error injection helpers
# =============================================================================


class FakeRegionClient:
    """Stand-in for AWSClient exposing a prepared RDS client."""

    def __init__(self, region, rds_client):
        self.region = region
        self._rds_client = rds_client

    def get_rds_client(self):
        return self._rds_client


def client_error(code, operation="DescribeDBInstances"):
    return ClientError(
        {"Error": {"Code": code, "Message": f"{code} for test"}},
        operation,
    )


@pytest.fixture
def stub_rds():
    """
    Return a builder for fake RDS clients.

    ``stub_rds(pages=..., error=..., delay=...)`` gives a MagicMock whose
    ``describe_db_instances`` paginator yields ``pages`` after sleeping
    ``delay`` seconds, or raises ``error``.
    """

    def _build(pages=None, error=None, delay=0.0):
        rds = MagicMock()

        def _paginate(**kwargs):
            if delay:
                time.sleep(delay)
            if error is not None:
                raise error
            return iter(pages or [])

        rds.get_paginator.return_value.paginate.side_effect = _paginate
        return rds

    return _build


@pytest.fixture
def db_page():
    """Return a builder for one DescribeDBInstances page."""

    def _page(*identifiers, engine="postgres", status="available"):
        return {
            "DBInstances": [
                {
                    "DBInstanceIdentifier": identifier,
                    "Engine": engine,
                    "DBInstanceStatus": status,
                }
                for identifier in identifiers
            ]
        }

    return _page


@pytest.fixture
def fake_client_factory():
    """
    Return a builder for client factories keyed by region.

    Each mapping value is a prepared RDS client, or an exception that the
    factory raises for that region.
    """

    def _factory(rds_by_region):
        def _make(region):
            rds = rds_by_region[region]
            if isinstance(rds, Exception):
                raise rds
            return FakeRegionClient(region, rds)

        return _make

    return _factory


@pytest.fixture
def client_error_factory():
    """Expose :func:`client_error` to tests."""
    return client_error


@pytest.fixture
def fake_region_client():
    """Expose :class:`FakeRegionClient` to tests."""
    return FakeRegionClient
