import logging
from typing import List, Optional, Type

from ..config import ClusterSpec, Config
from ..context import ModelBuilderContext, TaskGraph
from .api_loadbalancer import APILoadBalancerBuilder
from .autoscaling import AutoscalingGroupModelBuilder
from .base import ModelBuilder
from .context import ClusterModelContext
from .firewall import FirewallModelBuilder
from .network import NetworkModelBuilder

logger = logging.getLogger(__name__)

DEFAULT_BUILDERS: List[Type[ModelBuilder]] = [
    NetworkModelBuilder,
    FirewallModelBuilder,
    AutoscalingGroupModelBuilder,
    APILoadBalancerBuilder,
]


class Builder:
    """
    Runs every model builder over one cluster specification and resolves
    the resulting task graph.
    """

    def __init__(self, config: Config | ClusterSpec, builders: Optional[List[Type[ModelBuilder]]] = None):
        cluster = config.cluster if isinstance(config, Config) else config
        self.model = ClusterModelContext(cluster)
        self.builders = list(DEFAULT_BUILDERS if builders is None else builders)

    def run(self) -> TaskGraph:
        """Orchestrates one build pass; any error aborts the whole pass."""
        logger.info(f"[Builder] Starting build for cluster '{self.model.cluster_name}'...")
        context = ModelBuilderContext()
        for builder_cls in self.builders:
            logger.debug(f"[Builder] Invoking {builder_cls.__name__}...")
            builder_cls(self.model).build(context)

        graph = context.resolve()
        logger.info(f"[Builder] Build finished with {len(graph)} tasks.")
        return graph
