"""
autoapt: AWS Exposure Report
============================

Scans an AWS account for EC2 instances, the inbound access their security
groups allow, and RDS databases across several regions, then writes a
plain-text exposure report and serves it as a web page.

Modules
-------
core
    AWS client, region manager, records and exceptions
scanners
    Database and instance scanners
reporters
    Text, HTML and terminal output
web
    Flask application serving the report

Example
-------
>>> from autoapt import RegionManager
>>>
>>> databases = RegionManager().scan_all_regions(["us-east-1", "eu-west-1"])
>>> for region, records in databases.items():
...     print(region, [db.identifier for db in records])

Notes
-----
Requires AWS credentials configured via:
- Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)
- AWS credentials file (~/.aws/credentials)
- IAM role (when running on AWS infrastructure)
"""

__version__ = "0.1.0"
__license__ = "MIT"

from autoapt.core.aws_client import AWSClient
from autoapt.core.exceptions import AutoAptError, AWSClientError
from autoapt.core.records import DatabaseRecord, InstanceRecord
from autoapt.core.region_manager import DEFAULT_REGIONS, RegionManager

__all__ = [
    "__version__",
    "__license__",
    "AWSClient",
    "AWSClientError",
    "AutoAptError",
    "DatabaseRecord",
    "DEFAULT_REGIONS",
    "InstanceRecord",
    "RegionManager",
]
