"""
Custom Exceptions for autoapt
=============================

This module defines the exception hierarchy used throughout the
application for consistent error handling and reporting.

Exception Hierarchy
-------------------
::

    AutoAptError (base)
    ├── AWSClientError
    │   ├── CredentialsError
    │   ├── RegionError
    │   └── ServiceError
    ├── ScannerError
    │   ├── RegionScanError
    │   └── ResourceFetchError
    └── ReportError

Example
-------
>>> from autoapt.core.exceptions import AWSClientError, CredentialsError
>>>
>>> try:
...     client.validate_credentials()
... except CredentialsError as e:
...     print(f"Invalid credentials: {e}")
... except AWSClientError as e:
...     print(f"AWS error: {e}")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class AutoAptError(Exception):
    """
    Base exception for all autoapt errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Additional context about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Additional error details.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns
        -------
        dict
            Dictionary representation of the error.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# AWS Client Exceptions
# =============================================================================


class AWSClientError(AutoAptError):
    """
    Base exception for AWS client-related errors.

    Raised when there's an issue with AWS connectivity, authentication,
    or service access.

    Parameters
    ----------
    message : str
        Human-readable error message.
    service : str, optional
        The AWS service that caused the error.
    region : str, optional
        The AWS region where the error occurred.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.service = service
        self.region = region
        full_details = details or {}
        if service:
            full_details["service"] = service
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


class CredentialsError(AWSClientError):
    """
    Raised when AWS credentials are invalid, missing, or expired.

    Example
    -------
    >>> raise CredentialsError(
    ...     "AWS credentials not found",
    ...     details={"hint": "Run 'aws configure' to set up credentials"}
    ... )
    """

    pass


class RegionError(AWSClientError):
    """Raised when the specified AWS region is invalid or missing."""

    pass


class ServiceError(AWSClientError):
    """Raised when a client for a specific AWS service cannot be created."""

    pass


# =============================================================================
# Scanner Exceptions
# =============================================================================


class ScannerError(AutoAptError):
    """
    Base exception for scanner-related errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    resource_type : str, optional
        The type of resource being scanned.
    region : str, optional
        The AWS region being scanned.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_type = resource_type
        self.region = region
        full_details = details or {}
        if resource_type:
            full_details["resource_type"] = resource_type
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


class RegionScanError(ScannerError):
    """
    Raised when scanning one region fails for a reason other than
    access being denied.

    The region and the underlying exception are kept so the coordinator
    can log the failure before dropping the region.

    Parameters
    ----------
    message : str
        Human-readable error message.
    region : str
        The region whose scan failed.
    cause : Exception, optional
        The underlying exception.
    resource_type : str, default="db_instance"
        The type of resource being scanned.

    Example
    -------
    >>> raise RegionScanError(
    ...     "Failed to describe DB instances",
    ...     region="eu-west-1",
    ...     cause=err,
    ... )
    """

    def __init__(
        self,
        message: str,
        region: str,
        cause: Optional[BaseException] = None,
        resource_type: str = "db_instance",
    ) -> None:
        self.cause = cause
        details: Dict[str, Any] = {}
        if cause is not None:
            details["cause"] = f"{cause.__class__.__name__}: {cause}"
        super().__init__(
            message,
            resource_type=resource_type,
            region=region,
            details=details,
        )


class ResourceFetchError(ScannerError):
    """
    Raised when unable to fetch resources from AWS.

    Example
    -------
    >>> raise ResourceFetchError(
    ...     "Failed to describe instances",
    ...     resource_type="ec2_instance",
    ...     region="us-east-1"
    ... )
    """

    pass


# =============================================================================
# Report Exceptions
# =============================================================================


class ReportError(AutoAptError):
    """
    Raised when a report cannot be written or read back.

    Parameters
    ----------
    message : str
        Human-readable error message.
    path : str, optional
        The report file involved.
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.path = path
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(message, full_details)
