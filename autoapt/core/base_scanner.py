"""
Base Scanner Module
===================

Abstract base class shared by the autoapt scanners.

A scanner is bound to one ``AWSClient`` and therefore to one region.
It fetches a single kind of resource and returns immutable records.

Classes
-------
BaseScanner
    Abstract base class for resource scanners.

See Also
--------
DatabaseScanner : RDS instances of one region.
InstanceScanner : EC2 instances and their security group rules.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List

logger = logging.getLogger(__name__)


class BaseScanner(ABC):
    """
    Abstract base class for all resource scanners.

    Parameters
    ----------
    aws_client : AWSClient
        Region-scoped client used for every API call.

    Attributes
    ----------
    aws_client : AWSClient
        The AWS client instance.
    region : str
        The AWS region being scanned.
    """

    def __init__(self, aws_client) -> None:
        self.aws_client = aws_client
        logger.debug(
            f"Initialized {self.__class__.__name__} for region {self.region}"
        )

    @property
    def region(self) -> str:
        """Region of the underlying client, resolved once its session exists."""
        return self.aws_client.region

    @abstractmethod
    def get_resource_type(self) -> str:
        """
        Get the type of resource this scanner handles.

        Returns
        -------
        str
            Lowercase identifier with underscores (e.g. 'db_instance').
        """
        pass

    @abstractmethod
    def scan(self) -> List[Any]:
        """
        Fetch the resources of this scanner's type in its region.

        Returns
        -------
        list
            Records in the order the API returned them.

        Raises
        ------
        ScannerError
            If the resources cannot be fetched.
        """
        pass

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"region='{self.region}', "
            f"resource_type='{self.get_resource_type()}')"
        )
