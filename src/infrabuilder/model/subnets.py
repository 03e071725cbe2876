import logging
from typing import AbstractSet, List, NamedTuple, Tuple

from ..config import SubnetSpec
from ..constants import SubnetType
from ..exceptions import SubnetSelectionError

logger = logging.getLogger(__name__)


class ScoredSubnet(NamedTuple):
    score: int
    subnet: SubnetSpec

    @property
    def sort_key(self) -> Tuple[int, str]:
        # Highest score first; the name only makes ties reproducible
        return (-self.score, self.subnet.name)


class SubnetSelector:
    """
    Chooses the subnet a load balancer is attached to within one zone.

    Candidates have already been filtered to the subnet types the load
    balancer may use. A subnet scores a point for hosting a master instance
    group, which internal load balancers want, and a point for being a
    utility subnet, which public load balancers want.
    """

    def score(self, subnet: SubnetSpec, preferred_names: AbstractSet[str]) -> int:
        score = 0
        if subnet.name in preferred_names:
            score += 1
        if subnet.type == SubnetType.UTILITY.value:
            score += 1
        return score

    def rank(self, candidates: List[SubnetSpec], preferred_names: AbstractSet[str]) -> List[ScoredSubnet]:
        """All candidates, best first."""
        scored = [ScoredSubnet(self.score(subnet, preferred_names), subnet) for subnet in candidates]
        return sorted(scored, key=lambda s: s.sort_key)

    def choose(self, zone: str, candidates: List[SubnetSpec], preferred_names: AbstractSet[str]) -> SubnetSpec:
        if not candidates:
            raise SubnetSelectionError(f"No subnet available for zone {zone!r}")
        if len(candidates) == 1:
            return candidates[0]

        ranked = self.rank(candidates, preferred_names)
        if ranked[0].score == ranked[1].score:
            logger.debug(
                f"Making arbitrary choice between subnets in zone {zone!r} to attach to ELB "
                f"({ranked[0].subnet.name!r} vs {ranked[1].subnet.name!r})"
            )
        return ranked[0].subnet
