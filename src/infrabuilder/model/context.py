"""
Cluster-level naming and link helpers shared by the model builders.
"""

from typing import List, Optional

from .. import constants
from ..config import ClusterSpec, InstanceGroupSpec, LoadBalancerSpec, SubnetSpec
from ..constants import InstanceGroupRole
from ..exceptions import ReferenceNotFoundError
from ..tasks import VPC, AutoscalingGroup, Link, LoadBalancer, SecurityGroup, Subnet
from ..utils import dashed, limit_name


class ClusterModelContext:
    """
    Read-only view over a cluster specification and its instance groups.

    Every name a builder gives a task is derived here from stable
    identifiers, so separate builders agree on the names they link to.
    """

    def __init__(self, cluster: ClusterSpec, instance_groups: Optional[List[InstanceGroupSpec]] = None):
        self.cluster = cluster
        self.instance_groups = list(cluster.instance_groups if instance_groups is None else instance_groups)
        if instance_groups is not None:
            self._check_subnets(self.instance_groups)

    def _check_subnets(self, instance_groups: List[InstanceGroupSpec]) -> None:
        """Groups passed in explicitly may only span subnets the cluster defines"""
        defined = {subnet.name for subnet in self.cluster.subnets}
        for ig in instance_groups:
            for subnet_name in ig.subnets:
                if subnet_name not in defined:
                    raise ReferenceNotFoundError(
                        f"Instance group '{ig.name}' references an undefined subnet: '{subnet_name}'."
                    )

    @property
    def cluster_name(self) -> str:
        return self.cluster.name

    @property
    def load_balancer_spec(self) -> Optional[LoadBalancerSpec]:
        if self.cluster.api is None:
            return None
        return self.cluster.api.load_balancer

    def use_load_balancer_for_api(self) -> bool:
        return self.load_balancer_spec is not None

    def master_instance_groups(self) -> List[InstanceGroupSpec]:
        return [ig for ig in self.instance_groups if ig.is_master]

    # --- Names ---

    def elb_name_32(self, prefix: str) -> str:
        """Provider-side load balancer name, at most 32 characters."""
        return limit_name(f"{prefix}-{dashed(self.cluster_name)}", constants.ELB_NAME_MAX_LENGTH)

    def elb_security_group_name(self, prefix: str) -> str:
        return f"{prefix}-elb.{self.cluster_name}"

    def security_group_name(self, role: InstanceGroupRole) -> str:
        if role == InstanceGroupRole.MASTER:
            return f"masters.{self.cluster_name}"
        return f"nodes.{self.cluster_name}"

    def autoscaling_group_name(self, ig: InstanceGroupSpec) -> str:
        return f"{ig.name}.{self.cluster_name}"

    def subnet_name(self, subnet: SubnetSpec) -> str:
        return f"{subnet.name}.{self.cluster_name}"

    # --- Links ---

    def link_to_vpc(self) -> Link:
        return VPC.link(self.cluster_name)

    def link_to_subnet(self, subnet: SubnetSpec) -> Link:
        return Subnet.link(self.subnet_name(subnet))

    def link_to_elb(self, prefix: str) -> Link:
        return LoadBalancer.link(f"{prefix}.{self.cluster_name}")

    def link_to_elb_security_group(self, prefix: str) -> Link:
        return SecurityGroup.link(self.elb_security_group_name(prefix))

    def link_to_security_group(self, role: InstanceGroupRole) -> Link:
        return SecurityGroup.link(self.security_group_name(role))

    def link_to_autoscaling_group(self, ig: InstanceGroupSpec) -> Link:
        return AutoscalingGroup.link(self.autoscaling_group_name(ig))
