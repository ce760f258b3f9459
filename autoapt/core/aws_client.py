"""
AWS Client Module
=================

Thin wrapper around boto3 that owns one region-scoped session plus the
service clients autoapt needs (STS, EC2, RDS).

Every region worker of the database scan builds its own ``AWSClient`` so
no session or client object is ever shared between threads.

Classes
-------
AWSClient
    Region-scoped client holder.

Example
-------
>>> from autoapt.core.aws_client import AWSClient
>>>
>>> client = AWSClient(region="us-east-1", profile="audit")
>>> client.get_account_id()
'123456789012'
>>> rds = client.get_rds_client()

Without an explicit region, the region configured for the profile or in
``AWS_REGION`` / ``AWS_DEFAULT_REGION`` is used, falling back to
``us-east-1``:

>>> AWSClient(profile="audit").get_ec2_client()

See Also
--------
boto3 : AWS SDK for Python
botocore : Low-level AWS client library
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    NoRegionError,
    ProfileNotFound,
)

from autoapt.core.exceptions import (
    AWSClientError,
    CredentialsError,
    RegionError,
    ServiceError,
)

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"


class AWSClient:
    """
    Region-scoped boto3 session and service clients.

    Parameters
    ----------
    region : str, optional
        AWS region to connect to. When omitted, the region configured
        for the profile or the environment is used, else ``us-east-1``.
    profile : str, optional
        AWS profile name from ~/.aws/credentials.
    max_retries : int, default=3
        Maximum number of attempts for failed API calls.
    timeout : int, default=30
        Connect and read timeout in seconds.

    Attributes
    ----------
    region : str or None
        The AWS region. None until the session resolves it when no
        region was given.
    profile : str or None
        The configured AWS profile name.

    Raises
    ------
    CredentialsError
        If the profile does not exist or credentials cannot be found.
    RegionError
        If the region is missing.
    ServiceError
        If a service client cannot be created.
    """

    def __init__(
        self,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        max_retries: int = 3,
        timeout: int = 30,
    ) -> None:
        self.region = region
        self.profile = profile
        self.max_retries = max_retries
        self.timeout = timeout

        self._session: Optional[boto3.Session] = None
        self._clients: Dict[str, Any] = {}
        self._config = Config(
            retries={"max_attempts": max_retries, "mode": "adaptive"},
            connect_timeout=timeout,
            read_timeout=timeout,
        )

        logger.debug("Initialized AWSClient for %s (profile=%s)", region, profile)

    @property
    def session(self) -> boto3.Session:
        """The boto3 session, created on first access."""
        if self._session is None:
            self._session = self._create_session()
        return self._session

    def _create_session(self) -> boto3.Session:
        try:
            session_kwargs = {}
            if self.region:
                session_kwargs["region_name"] = self.region
            if self.profile:
                session_kwargs["profile_name"] = self.profile
            session = boto3.Session(**session_kwargs)

            if not self.region:
                self.region = session.region_name or DEFAULT_REGION
                logger.debug("Resolved region %s from configuration", self.region)
            return session

        except ProfileNotFound:
            raise CredentialsError(
                f"AWS profile '{self.profile}' not found",
                region=self.region,
                details={
                    "profile": self.profile,
                    "hint": "Check ~/.aws/credentials for available profiles",
                },
            )
        except NoRegionError:
            raise RegionError(
                f"Invalid or missing region: {self.region}",
                region=self.region,
            )
        except BotoCoreError as e:
            raise AWSClientError(
                f"Failed to create AWS session: {e}",
                region=self.region,
            )

    def _get_client(self, service_name: str) -> Any:
        """
        Get or create a boto3 client for ``service_name``.

        Clients are cached per ``AWSClient`` instance.
        """
        if service_name in self._clients:
            return self._clients[service_name]

        try:
            session = self.session
            client = session.client(
                service_name,
                region_name=self.region,
                config=self._config,
            )
        except NoCredentialsError:
            raise CredentialsError(
                "AWS credentials not found",
                region=self.region,
                details={
                    "hint": (
                        "Configure credentials using 'aws configure' or set "
                        "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY "
                        "environment variables"
                    ),
                },
            )
        except NoRegionError:
            raise RegionError(
                f"Invalid or missing region: {self.region}",
                service=service_name,
                region=self.region,
            )
        except BotoCoreError as e:
            raise ServiceError(
                f"Failed to create {service_name} client: {e}",
                service=service_name,
                region=self.region,
            )

        self._clients[service_name] = client
        logger.debug("Created %s client for %s", service_name, self.region)
        return client

    # =========================================================================
    # Service Client Accessors
    # =========================================================================

    def get_ec2_client(self) -> Any:
        """Get the EC2 client for this region."""
        return self._get_client("ec2")

    def get_rds_client(self) -> Any:
        """
        Get the RDS client for this region.

        Example
        -------
        >>> rds = client.get_rds_client()
        >>> rds.describe_db_instances()
        """
        return self._get_client("rds")

    def get_sts_client(self) -> Any:
        """Get the STS client."""
        return self._get_client("sts")

    # =========================================================================
    # Credential and Account Operations
    # =========================================================================

    def get_caller_identity(self) -> Dict[str, str]:
        """
        Call STS GetCallerIdentity.

        Returns
        -------
        dict
            Dictionary containing 'Account', 'Arn', and 'UserId'.

        Raises
        ------
        CredentialsError
            If credentials are invalid, expired, or missing.
        """
        try:
            identity = self.get_sts_client().get_caller_identity()
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise CredentialsError(
                f"Failed to validate credentials: {e}",
                service="sts",
                details={"error_code": error_code},
            )
        except BotoCoreError as e:
            raise CredentialsError(
                f"Failed to validate credentials: {e}",
                service="sts",
            )

        logger.debug("Caller identity: %s", identity.get("Arn"))
        return identity

    def get_account_id(self) -> str:
        """Return the 12-digit account ID of the current credentials."""
        return self.get_caller_identity()["Account"]

    def __repr__(self) -> str:
        return (
            f"AWSClient(region='{self.region}', "
            f"profile={self.profile!r}, "
            f"max_retries={self.max_retries})"
        )
