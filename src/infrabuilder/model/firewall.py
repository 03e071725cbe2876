from ..constants import InstanceGroupRole
from ..context import ModelBuilderContext
from ..tasks import SecurityGroup
from ..utils import override
from .base import ModelBuilder


class FirewallModelBuilder(ModelBuilder):
    """Builds the security group shared by each instance group role."""

    @override
    def build(self, c: ModelBuilderContext) -> None:
        for role in InstanceGroupRole:
            c.add_task(SecurityGroup(
                name=self.model.security_group_name(role),
                vpc=self.model.link_to_vpc(),
                description=f"Security group for {role.value.lower()}s",
            ))
