"""
Tests for the Instance Scanner.
"""

from unittest.mock import MagicMock

import pytest

from autoapt.core.exceptions import ResourceFetchError
from autoapt.core.records import InstanceRecord, PortAccess, SecurityGroupAccess
from autoapt.scanners.instance_scanner import InstanceScanner


@pytest.fixture
def web_security_group(ec2_client, vpc):
    """A security group allowing SSH from one network and HTTPS from anywhere."""
    sg_id = ec2_client.create_security_group(
        GroupName="web-sg",
        Description="Web servers",
        VpcId=vpc,
    )["GroupId"]
    ec2_client.authorize_security_group_ingress(
        GroupId=sg_id,
        IpPermissions=[
            {
                "IpProtocol": "tcp",
                "FromPort": 22,
                "ToPort": 22,
                "IpRanges": [{"CidrIp": "10.0.0.0/8"}],
            },
            {
                "IpProtocol": "tcp",
                "FromPort": 443,
                "ToPort": 443,
                "IpRanges": [{"CidrIp": "0.0.0.0/0"}],
            },
        ],
    )
    return sg_id


class TestInstanceScanner:
    """Tests for InstanceScanner against moto."""

    def test_get_resource_type(self, aws_client):
        assert InstanceScanner(aws_client).get_resource_type() == "ec2_instance"

    def test_no_instances(self, aws_client):
        assert InstanceScanner(aws_client).scan() == []

    def test_instance_with_security_group_rules(
        self, aws_client, ec2_client, subnet, web_security_group
    ):
        """Instances carry their name tag and their groups' inbound rules."""
        instance_id = ec2_client.run_instances(
            ImageId="ami-12345678",
            MinCount=1,
            MaxCount=1,
            InstanceType="t2.micro",
            SubnetId=subnet,
            SecurityGroupIds=[web_security_group],
            TagSpecifications=[
                {
                    "ResourceType": "instance",
                    "Tags": [{"Key": "Name", "Value": "web-1"}],
                }
            ],
        )["Instances"][0]["InstanceId"]

        records = InstanceScanner(aws_client).scan()

        assert len(records) == 1
        record = records[0]
        assert record.instance_id == instance_id
        assert record.name == "web-1"

        assert [sg.group_id for sg in record.security_groups] == [web_security_group]
        sg = record.security_groups[0]
        assert sg.group_name == "web-sg"

        ports = {p.port: p for p in sg.ports}
        assert ports[22].protocol == "tcp"
        assert ports[22].source_ranges == ("10.0.0.0/8",)
        assert ports[443].source_ranges == ("0.0.0.0/0",)
        assert [p.port for p in record.exposed_ports] == [443]

    def test_instance_without_name_tag(self, aws_client, ec2_client, subnet):
        ec2_client.run_instances(
            ImageId="ami-12345678",
            MinCount=2,
            MaxCount=2,
            InstanceType="t2.micro",
            SubnetId=subnet,
        )

        records = InstanceScanner(aws_client).scan()

        assert len(records) == 2
        assert all(r.name == "" for r in records)


class TestInstanceScannerUnit:
    """Tests using a prepared EC2 client."""

    @staticmethod
    def _client(ec2):
        client = MagicMock()
        client.region = "us-east-1"
        client.get_ec2_client.return_value = ec2
        return client

    def test_build_record_maps_fields(self):
        groups = {
            "sg-1": SecurityGroupAccess(
                group_id="sg-1",
                group_name="ssh",
                ports=(
                    PortAccess(port=22, protocol="tcp", source_ranges=("0.0.0.0/0",)),
                ),
            )
        }
        instance = {
            "InstanceId": "i-abc",
            "PublicIpAddress": "203.0.113.10",
            "Tags": [
                {"Key": "Env", "Value": "prod"},
                {"Key": "Name", "Value": "bastion"},
            ],
            "SecurityGroups": [
                {"GroupId": "sg-1", "GroupName": "ssh"},
                {"GroupId": "sg-missing", "GroupName": "gone"},
            ],
        }

        record = InstanceScanner._build_record(instance, groups)

        assert record == InstanceRecord(
            instance_id="i-abc",
            name="bastion",
            public_ip="203.0.113.10",
            security_groups=(groups["sg-1"],),
        )

    def test_security_groups_described_once(self):
        ec2 = MagicMock()
        instances_paginator = MagicMock()
        instances_paginator.paginate.return_value = [
            {
                "Reservations": [
                    {
                        "Instances": [
                            {
                                "InstanceId": "i-1",
                                "SecurityGroups": [{"GroupId": "sg-1"}],
                            },
                            {
                                "InstanceId": "i-2",
                                "SecurityGroups": [{"GroupId": "sg-1"}],
                            },
                        ]
                    }
                ]
            }
        ]
        groups_paginator = MagicMock()
        groups_paginator.paginate.return_value = [
            {
                "SecurityGroups": [
                    {"GroupId": "sg-1", "GroupName": "shared", "IpPermissions": []}
                ]
            }
        ]
        ec2.get_paginator.side_effect = lambda name: {
            "describe_instances": instances_paginator,
            "describe_security_groups": groups_paginator,
        }[name]

        records = InstanceScanner(self._client(ec2)).scan()

        groups_paginator.paginate.assert_called_once_with(GroupIds=["sg-1"])
        assert [r.instance_id for r in records] == ["i-1", "i-2"]
        assert records[1].security_groups[0].group_name == "shared"

    def test_group_ids_keep_first_seen_order(self):
        ec2 = MagicMock()
        instances_paginator = MagicMock()
        instances_paginator.paginate.return_value = [
            {
                "Reservations": [
                    {
                        "Instances": [
                            {
                                "InstanceId": "i-1",
                                "SecurityGroups": [
                                    {"GroupId": "sg-b"},
                                    {"GroupId": "sg-a"},
                                ],
                            },
                            {
                                "InstanceId": "i-2",
                                "SecurityGroups": [
                                    {"GroupId": "sg-a"},
                                    {"GroupId": "sg-c"},
                                    {"GroupId": "sg-b"},
                                ],
                            },
                        ]
                    }
                ]
            }
        ]
        groups_paginator = MagicMock()
        groups_paginator.paginate.return_value = []
        ec2.get_paginator.side_effect = lambda name: {
            "describe_instances": instances_paginator,
            "describe_security_groups": groups_paginator,
        }[name]

        InstanceScanner(self._client(ec2)).scan()

        groups_paginator.paginate.assert_called_once_with(
            GroupIds=["sg-b", "sg-a", "sg-c"]
        )

    def test_describe_failure_raises(self, client_error_factory):
        ec2 = MagicMock()
        ec2.get_paginator.return_value.paginate.side_effect = client_error_factory(
            "UnauthorizedOperation", "DescribeInstances"
        )

        with pytest.raises(ResourceFetchError) as exc_info:
            InstanceScanner(self._client(ec2)).scan()

        assert exc_info.value.resource_type == "ec2_instance"
        assert "failed to describe instances" in exc_info.value.message


class TestPortAccess:
    """Tests for mapping inbound permissions."""

    def test_all_traffic_rule_has_port_zero(self):
        port = PortAccess.from_permission(
            {"IpProtocol": "-1", "IpRanges": [{"CidrIp": "0.0.0.0/0"}]}
        )
        assert port.port == 0
        assert port.protocol == "-1"
        assert port.is_open_to_world

    def test_ipv6_ranges_follow_ipv4(self):
        port = PortAccess.from_permission(
            {
                "IpProtocol": "tcp",
                "FromPort": 80,
                "IpRanges": [{"CidrIp": "198.51.100.0/24"}],
                "Ipv6Ranges": [{"CidrIpv6": "::/0"}],
            }
        )
        assert port.source_ranges == ("198.51.100.0/24", "::/0")
        assert port.is_open_to_world

    def test_group_reference_only_rule_has_no_ranges(self):
        port = PortAccess.from_permission(
            {
                "IpProtocol": "tcp",
                "FromPort": 5432,
                "UserIdGroupPairs": [{"GroupId": "sg-app"}],
            }
        )
        assert port.source_ranges == ()
        assert not port.is_open_to_world
