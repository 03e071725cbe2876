from typing import ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import Link, Task


class LoadBalancerListener(BaseModel):
    """Forwards the listener port (the dict key) to `instance_port` on the backends."""
    model_config = ConfigDict(frozen=True)

    instance_port: int


class LoadBalancerHealthCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: str
    timeout: int
    interval: int
    healthy_threshold: int
    unhealthy_threshold: int


class LoadBalancerConnectionSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    idle_timeout: int


class LoadBalancer(Task):
    """
    A classic load balancer.

    `scheme` is unset for internet-facing load balancers and "internal"
    for load balancers only routable inside the network.
    """
    kind: ClassVar[str] = "LoadBalancer"

    load_balancer_name: str
    security_groups: List[Link] = Field(default_factory=list)
    subnets: List[Link] = Field(default_factory=list)
    listeners: Dict[str, LoadBalancerListener] = Field(default_factory=dict)
    health_check: Optional[LoadBalancerHealthCheck] = None
    connection_settings: Optional[LoadBalancerConnectionSettings] = None
    scheme: Optional[str] = None


class LoadBalancerAttachment(Task):
    """Registers an autoscaling group as a backend of a load balancer."""
    kind: ClassVar[str] = "LoadBalancerAttachment"

    load_balancer: Link
    autoscaling_group: Link
