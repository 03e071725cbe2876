import logging

from ..context import ModelBuilderContext
from ..tasks import AutoscalingGroup
from ..utils import override
from .base import ModelBuilder

logger = logging.getLogger(__name__)


class AutoscalingGroupModelBuilder(ModelBuilder):
    """Builds one autoscaling group per instance group."""

    @override
    def build(self, c: ModelBuilderContext) -> None:
        subnets = {subnet.name: subnet for subnet in self.model.cluster.subnets}
        for ig in self.model.instance_groups:
            c.add_task(AutoscalingGroup(
                name=self.model.autoscaling_group_name(ig),
                min_size=ig.min_size,
                max_size=ig.max_size,
                subnets=[self.model.link_to_subnet(subnets[name]) for name in ig.subnets],
                security_groups=[self.model.link_to_security_group(ig.role)],
            ))
            logger.debug(f"[ASG] Instance group '{ig.name}' spans {len(ig.subnets)} subnets.")
