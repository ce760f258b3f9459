"""
Record Types
============

Immutable data classes describing what the scanners found.

Classes
-------
DatabaseRecord
    One RDS database instance.
PortAccess
    One inbound permission of a security group.
SecurityGroupAccess
    A security group and its inbound permissions.
InstanceRecord
    One EC2 instance with its attached security groups.

Example
-------
>>> record = DatabaseRecord.from_api({
...     "DBInstanceIdentifier": "orders-db",
...     "DBName": "orders",
...     "Engine": "postgres",
...     "DBInstanceStatus": "available",
... })
>>> record.name
'orders'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class DatabaseRecord:
    """
    A managed database instance found in one region.

    Parameters
    ----------
    identifier : str
        The DB instance identifier.
    name : str, optional
        The initial database name, when one was set at creation.
    engine : str, optional
        Engine type (e.g. 'postgres', 'mysql').
    status : str, optional
        Instance status (e.g. 'available', 'stopped').
    """

    identifier: str
    name: Optional[str] = None
    engine: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_api(cls, db_instance: Dict[str, Any]) -> DatabaseRecord:
        """Build a record from one ``DBInstances`` entry of DescribeDBInstances."""
        return cls(
            identifier=db_instance["DBInstanceIdentifier"],
            name=db_instance.get("DBName"),
            engine=db_instance.get("Engine"),
            status=db_instance.get("DBInstanceStatus"),
        )


@dataclass(frozen=True)
class PortAccess:
    """
    One inbound rule of a security group.

    Parameters
    ----------
    port : int
        Start of the port range (``FromPort``); 0 when the rule has none,
        as for the all-traffic protocol ``-1``.
    protocol : str
        IP protocol as returned by EC2 ('tcp', 'udp', '-1', ...).
    source_ranges : tuple of str
        IPv4 then IPv6 CIDR blocks allowed by the rule.
    """

    port: int
    protocol: str
    source_ranges: Tuple[str, ...] = ()

    @classmethod
    def from_permission(cls, permission: Dict[str, Any]) -> PortAccess:
        ranges = [r["CidrIp"] for r in permission.get("IpRanges", []) if "CidrIp" in r]
        ranges += [
            r["CidrIpv6"] for r in permission.get("Ipv6Ranges", []) if "CidrIpv6" in r
        ]
        return cls(
            port=permission.get("FromPort", 0),
            protocol=permission.get("IpProtocol", "-1"),
            source_ranges=tuple(ranges),
        )

    @property
    def is_open_to_world(self) -> bool:
        return any(r in ("0.0.0.0/0", "::/0") for r in self.source_ranges)


@dataclass(frozen=True)
class SecurityGroupAccess:
    """A security group with its inbound permissions, in API order."""

    group_id: str
    group_name: str
    ports: Tuple[PortAccess, ...] = ()

    @classmethod
    def from_api(cls, security_group: Dict[str, Any]) -> SecurityGroupAccess:
        return cls(
            group_id=security_group["GroupId"],
            group_name=security_group.get("GroupName", ""),
            ports=tuple(
                PortAccess.from_permission(p)
                for p in security_group.get("IpPermissions", [])
            ),
        )


@dataclass(frozen=True)
class InstanceRecord:
    """
    An EC2 instance and the inbound access its security groups allow.

    Parameters
    ----------
    instance_id : str
        The EC2 instance ID.
    name : str
        Value of the ``Name`` tag, or an empty string.
    public_ip : str
        Public IPv4 address, or an empty string.
    security_groups : tuple of SecurityGroupAccess
        Attached groups in attachment order.
    """

    instance_id: str
    name: str = ""
    public_ip: str = ""
    security_groups: Tuple[SecurityGroupAccess, ...] = field(default_factory=tuple)

    @property
    def exposed_ports(self) -> List[PortAccess]:
        """Inbound rules open to any address, across all attached groups."""
        return [
            port
            for sg in self.security_groups
            for port in sg.ports
            if port.is_open_to_world
        ]
