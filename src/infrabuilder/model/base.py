from abc import ABC, abstractmethod

from ..context import ModelBuilderContext
from .context import ClusterModelContext


class ModelBuilder(ABC):
    """
    Abstract base class for a model builder.

    A model builder reads the cluster specification and appends the tasks
    for one part of the cluster to the shared collection. It keeps no state
    between calls; configuration problems are raised, and tasks already
    appended are left in place for the caller to discard.
    """

    def __init__(self, model: ClusterModelContext):
        self.model = model

    @abstractmethod
    def build(self, c: ModelBuilderContext) -> None:
        """Append this builder's tasks to `c`."""
        raise NotImplementedError
