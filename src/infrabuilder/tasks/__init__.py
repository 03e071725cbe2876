"""
Infra Builder Tasks

Resource descriptors produced by the model builders:
- base: Task base class and the Link reference value
- loadbalancer: load balancer, its listener/health-check settings and attachments
- securitygroup: security groups and their rules
- network: VPC, subnets and autoscaling groups
"""

from .base import Link, Task
from .loadbalancer import (
    LoadBalancer,
    LoadBalancerAttachment,
    LoadBalancerConnectionSettings,
    LoadBalancerHealthCheck,
    LoadBalancerListener,
)
from .securitygroup import SecurityGroup, SecurityGroupRule
from .network import VPC, Subnet, AutoscalingGroup

__all__ = [
    'Link',
    'Task',
    'LoadBalancer',
    'LoadBalancerAttachment',
    'LoadBalancerConnectionSettings',
    'LoadBalancerHealthCheck',
    'LoadBalancerListener',
    'SecurityGroup',
    'SecurityGroupRule',
    'VPC',
    'Subnet',
    'AutoscalingGroup',
]
