"""
Instance Scanner Module
=======================

Builds the EC2 instance inventory of one region together with the
inbound access allowed by each instance's security groups.

Classes
-------
InstanceScanner
    Scanner returning :class:`InstanceRecord` objects.

Example
-------
>>> from autoapt.core import AWSClient
>>> from autoapt.scanners import InstanceScanner
>>>
>>> scanner = InstanceScanner(AWSClient(region="us-east-1"))
>>> for instance in scanner.scan():
...     print(instance.instance_id, instance.public_ip)
...     for sg in instance.security_groups:
...         for port in sg.ports:
...             print(f"  {port.port}/{port.protocol} from {port.source_ranges}")

Notes
-----
Security group details are fetched once for the distinct set of groups
attached to any instance. A group whose details are missing from the
response is left out of the instance record.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from botocore.exceptions import BotoCoreError, ClientError

from autoapt.core.base_scanner import BaseScanner
from autoapt.core.exceptions import ResourceFetchError
from autoapt.core.records import InstanceRecord, SecurityGroupAccess

logger = logging.getLogger(__name__)


class InstanceScanner(BaseScanner):
    """
    Scanner for EC2 instances and their security group rules.

    Parameters
    ----------
    aws_client : AWSClient
        Client bound to the region to inventory.
    """

    def __init__(self, aws_client) -> None:
        super().__init__(aws_client)
        self._ec2_client = None

    @property
    def ec2_client(self):
        """EC2 client (lazy loaded)."""
        if self._ec2_client is None:
            self._ec2_client = self.aws_client.get_ec2_client()
        return self._ec2_client

    def get_resource_type(self) -> str:
        return "ec2_instance"

    def scan(self) -> List[InstanceRecord]:
        """
        Inventory the region's instances.

        Returns
        -------
        list of InstanceRecord
            One record per instance, reservations flattened in API order.

        Raises
        ------
        ResourceFetchError
            If instances or security groups cannot be described.
        """
        instances = self._describe_instances()

        group_ids = list(
            dict.fromkeys(
                sg["GroupId"]
                for instance in instances
                for sg in instance.get("SecurityGroups", [])
            )
        )

        groups = self._describe_security_groups(group_ids)

        records = [self._build_record(instance, groups) for instance in instances]
        logger.info(f"Found {len(records)} EC2 instances in {self.region}")
        return records

    # =========================================================================
    # Private Methods
    # =========================================================================

    def _describe_instances(self) -> List[Dict[str, Any]]:
        instances: List[Dict[str, Any]] = []
        paginator = self.ec2_client.get_paginator("describe_instances")

        try:
            for page in paginator.paginate():
                for reservation in page["Reservations"]:
                    instances.extend(reservation.get("Instances", []))
        except (ClientError, BotoCoreError) as e:
            raise ResourceFetchError(
                f"failed to describe instances: {e}",
                resource_type=self.get_resource_type(),
                region=self.region,
            ) from e

        return instances

    def _describe_security_groups(
        self,
        group_ids: Iterable[str],
    ) -> Dict[str, SecurityGroupAccess]:
        group_ids = list(group_ids)
        if not group_ids:
            return {}

        groups: Dict[str, SecurityGroupAccess] = {}
        paginator = self.ec2_client.get_paginator("describe_security_groups")

        try:
            for page in paginator.paginate(GroupIds=group_ids):
                for sg in page["SecurityGroups"]:
                    groups[sg["GroupId"]] = SecurityGroupAccess.from_api(sg)
        except (ClientError, BotoCoreError) as e:
            raise ResourceFetchError(
                f"failed to describe security groups: {e}",
                resource_type="security_group",
                region=self.region,
            ) from e

        logger.debug(f"Fetched {len(groups)} security groups in {self.region}")
        return groups

    @staticmethod
    def _build_record(
        instance: Dict[str, Any],
        groups: Dict[str, SecurityGroupAccess],
    ) -> InstanceRecord:
        name = ""
        for tag in instance.get("Tags", []):
            if tag.get("Key") == "Name":
                name = tag.get("Value", "")
                break

        return InstanceRecord(
            instance_id=instance["InstanceId"],
            name=name,
            public_ip=instance.get("PublicIpAddress", ""),
            security_groups=tuple(
                groups[sg["GroupId"]]
                for sg in instance.get("SecurityGroups", [])
                if sg["GroupId"] in groups
            ),
        )
