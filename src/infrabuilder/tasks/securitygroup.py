from typing import ClassVar, List, Optional

from pydantic import Field

from .base import Link, Task


class SecurityGroup(Task):
    """
    A security group.

    Inbound rules not matching one of `remove_extra_rules` (e.g. "port=443")
    are deleted by the executor when it reconciles the group.
    """
    kind: ClassVar[str] = "SecurityGroup"

    vpc: Link
    description: Optional[str] = None
    remove_extra_rules: List[str] = Field(default_factory=list)


class SecurityGroupRule(Task):
    """One ingress or egress rule, sourced from a CIDR or from another group."""
    kind: ClassVar[str] = "SecurityGroupRule"

    security_group: Link
    source_group: Optional[Link] = None
    cidr: Optional[str] = None
    egress: Optional[bool] = None
    protocol: Optional[str] = None
    from_port: Optional[int] = None
    to_port: Optional[int] = None
