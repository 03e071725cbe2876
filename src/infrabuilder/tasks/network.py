from typing import ClassVar, List, Optional

from pydantic import Field

from .base import Link, Task


class VPC(Task):
    kind: ClassVar[str] = "VPC"

    cidr: Optional[str] = None


class Subnet(Task):
    kind: ClassVar[str] = "Subnet"

    vpc: Link
    availability_zone: str
    cidr: Optional[str] = None


class AutoscalingGroup(Task):
    """The scaling construct behind an instance group."""
    kind: ClassVar[str] = "AutoscalingGroup"

    min_size: int
    max_size: int
    subnets: List[Link] = Field(default_factory=list)
    security_groups: List[Link] = Field(default_factory=list)
