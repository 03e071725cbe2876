import logging

from ..context import ModelBuilderContext
from ..tasks import VPC, Subnet
from ..utils import override
from .base import ModelBuilder

logger = logging.getLogger(__name__)


class NetworkModelBuilder(ModelBuilder):
    """Builds the cluster VPC and one task per cluster subnet."""

    @override
    def build(self, c: ModelBuilderContext) -> None:
        cluster = self.model.cluster
        c.add_task(VPC(name=self.model.cluster_name, cidr=cluster.network_cidr))

        for subnet in cluster.subnets:
            c.add_task(Subnet(
                name=self.model.subnet_name(subnet),
                vpc=self.model.link_to_vpc(),
                availability_zone=subnet.zone,
                cidr=subnet.cidr,
            ))
        logger.debug(f"[Network] Added VPC and {len(cluster.subnets)} subnets.")
