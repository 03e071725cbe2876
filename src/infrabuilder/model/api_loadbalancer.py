import logging
from collections import defaultdict
from typing import Dict, List

from .. import constants
from ..config import LoadBalancerSpec, SubnetSpec
from ..constants import InstanceGroupRole, LoadBalancerType, SubnetType
from ..context import ModelBuilderContext
from ..exceptions import LoadBalancerDefinitionError, SubnetDefinitionError
from ..tasks import (
    Link,
    LoadBalancer,
    LoadBalancerAttachment,
    LoadBalancerConnectionSettings,
    LoadBalancerHealthCheck,
    LoadBalancerListener,
    SecurityGroup,
    SecurityGroupRule,
)
from ..utils import override
from .base import ModelBuilder
from .subnets import SubnetSelector

logger = logging.getLogger(__name__)


class APILoadBalancerBuilder(ModelBuilder):
    """
    Builds the load balancer in front of the Kubernetes API, its security
    group and rules, and the attachments of the master instance groups.
    """

    prefix = constants.API_PREFIX

    @override
    def build(self, c: ModelBuilderContext) -> None:
        # Configuration where a load balancer fronts the API
        if not self.model.use_load_balancer_for_api():
            logger.debug("[API LB] API is not fronted by a load balancer, skipping.")
            return

        lb_spec = self.model.load_balancer_spec
        if lb_spec is None:
            logger.debug("[API LB] No load balancer requested in spec, skipping.")
            return

        lb_type = self._load_balancer_type(lb_spec)
        logger.info(f"[API LB] Building {lb_type.value} load balancer for cluster '{self.model.cluster_name}'...")

        subnets = self._choose_subnets(lb_type)
        c.add_task(self._load_balancer(lb_spec, lb_type, subnets))

        # Security group for the API load balancer
        c.add_task(SecurityGroup(
            name=self.model.elb_security_group_name(self.prefix),
            vpc=self.model.link_to_vpc(),
            description="Security group for api ELB",
            remove_extra_rules=[f"port={constants.HTTPS_PORT}"],
        ))

        elb_sg = self.model.link_to_elb_security_group(self.prefix)

        # Allow traffic from the load balancer to egress freely
        c.add_task(SecurityGroupRule(
            name="api-elb-egress",
            security_group=elb_sg,
            egress=True,
            cidr=constants.ANY_IPV4,
        ))

        # Allow traffic into the load balancer from the API access CIDRs
        for cidr in self.model.cluster.kubernetes_api_access:
            c.add_task(SecurityGroupRule(
                name=f"https-api-elb-{cidr}",
                security_group=elb_sg,
                cidr=cidr,
                protocol="tcp",
                from_port=constants.HTTPS_PORT,
                to_port=constants.HTTPS_PORT,
            ))

        # Allow HTTPS to the master instances from the load balancer
        c.add_task(SecurityGroupRule(
            name="https-elb-to-master",
            security_group=self.model.link_to_security_group(InstanceGroupRole.MASTER),
            source_group=elb_sg,
            protocol="tcp",
            from_port=constants.HTTPS_PORT,
            to_port=constants.HTTPS_PORT,
        ))

        for ig in self.model.master_instance_groups():
            c.add_task(LoadBalancerAttachment(
                name=f"{self.prefix}-{ig.name}",
                load_balancer=self.model.link_to_elb(self.prefix),
                autoscaling_group=self.model.link_to_autoscaling_group(ig),
            ))

    def _load_balancer_type(self, lb_spec: LoadBalancerSpec) -> LoadBalancerType:
        try:
            return LoadBalancerType(lb_spec.type)
        except ValueError:
            raise LoadBalancerDefinitionError(f"Unhandled LoadBalancer type {lb_spec.type!r}")

    def _subnets_by_zone(self, lb_type: LoadBalancerType) -> Dict[str, List[SubnetSpec]]:
        """Cluster subnets the load balancer may use, grouped by zone."""
        allowed = constants.LOAD_BALANCER_SUBNET_TYPES[lb_type]
        by_zone: Dict[str, List[SubnetSpec]] = defaultdict(list)
        for subnet in self.model.cluster.subnets:
            try:
                subnet_type = SubnetType(subnet.type)
            except ValueError:
                raise SubnetDefinitionError(f"Subnet {subnet.name!r} had unknown type {subnet.type!r}")
            if subnet_type not in allowed:
                continue
            by_zone[subnet.zone].append(subnet)
        return by_zone

    def _choose_subnets(self, lb_type: LoadBalancerType) -> List[Link]:
        """One subnet per zone, in zone order."""
        preferred = {
            name
            for ig in self.model.master_instance_groups()
            for name in ig.subnets
        }
        selector = SubnetSelector()
        by_zone = self._subnets_by_zone(lb_type)

        links = []
        for zone in sorted(by_zone):
            subnet = selector.choose(zone, by_zone[zone], preferred)
            logger.debug(f"[API LB] Zone '{zone}': attaching to subnet '{subnet.name}'.")
            links.append(self.model.link_to_subnet(subnet))
        if not links:
            logger.warning(f"[API LB] No {lb_type.value} subnet is usable; the load balancer will have no subnets.")
        return links

    def _load_balancer(self, lb_spec: LoadBalancerSpec, lb_type: LoadBalancerType, subnets: List[Link]) -> LoadBalancer:
        idle_timeout = lb_spec.idle_timeout_seconds
        if idle_timeout is None:
            idle_timeout = int(constants.LOAD_BALANCER_DEFAULT_IDLE_TIMEOUT.total_seconds())

        port = constants.HTTPS_PORT
        return LoadBalancer(
            name=f"{self.prefix}.{self.model.cluster_name}",
            load_balancer_name=self.model.elb_name_32(self.prefix),
            security_groups=[self.model.link_to_elb_security_group(self.prefix)],
            subnets=subnets,
            listeners={str(port): LoadBalancerListener(instance_port=port)},
            # Configure fast-recovery health-checks
            health_check=LoadBalancerHealthCheck(
                target=f"TCP:{port}",
                timeout=constants.HEALTH_CHECK_TIMEOUT,
                interval=constants.HEALTH_CHECK_INTERVAL,
                healthy_threshold=constants.HEALTH_CHECK_HEALTHY_THRESHOLD,
                unhealthy_threshold=constants.HEALTH_CHECK_UNHEALTHY_THRESHOLD,
            ),
            connection_settings=LoadBalancerConnectionSettings(
                idle_timeout=idle_timeout,
            ),
            scheme=constants.INTERNAL_SCHEME if lb_type == LoadBalancerType.INTERNAL else None,
        )
