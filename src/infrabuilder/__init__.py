"""
Infra Builder

Translates a cluster specification into a graph of infrastructure resource
tasks, linked to each other by name, for an external executor to reconcile.

Main modules:
- config: Cluster specification loading and validation
- tasks: Resource task descriptors and links
- context: Task collection, link resolution and ordering
- model: Model builders (API load balancer, network, firewall, autoscaling)
- utils: Logging and naming utilities

Quick start example:
```python
from infrabuilder import Builder, Config

graph = Builder(Config("cluster.yml")).run()
for key in graph.order():
    print(key)
```
"""

__version__ = "0.3.0"

from .config import Config, ClusterSpec
from .context import ModelBuilderContext, TaskGraph
from .model import Builder, APILoadBalancerBuilder, SubnetSelector
from .exceptions import (
    InfraBuilderError,
    ConfigurationError,
    ConfigValidationError,
    DefinitionError,
    BuildError,
)

__all__ = [
    # Version
    '__version__',
    # Config
    'Config',
    'ClusterSpec',
    # Collection
    'ModelBuilderContext',
    'TaskGraph',
    # Builders
    'Builder',
    'APILoadBalancerBuilder',
    'SubnetSelector',
    # Exceptions
    'InfraBuilderError',
    'ConfigurationError',
    'ConfigValidationError',
    'DefinitionError',
    'BuildError',
]
