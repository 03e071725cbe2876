"""
Infra Builder Model

- context: naming and link helpers over a cluster specification
- base: ModelBuilder abstract base
- subnets: per-zone subnet selection for load balancers
- api_loadbalancer: the API load balancer and its security rules
- network, firewall, autoscaling: the tasks the API load balancer links to
- build: the orchestrating Builder
"""

from .context import ClusterModelContext
from .base import ModelBuilder
from .subnets import ScoredSubnet, SubnetSelector
from .api_loadbalancer import APILoadBalancerBuilder
from .network import NetworkModelBuilder
from .firewall import FirewallModelBuilder
from .autoscaling import AutoscalingGroupModelBuilder
from .build import Builder, DEFAULT_BUILDERS

__all__ = [
    'ClusterModelContext',
    'ModelBuilder',
    'ScoredSubnet',
    'SubnetSelector',
    'APILoadBalancerBuilder',
    'NetworkModelBuilder',
    'FirewallModelBuilder',
    'AutoscalingGroupModelBuilder',
    'Builder',
    'DEFAULT_BUILDERS',
]
