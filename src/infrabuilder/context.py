"""
Infra Builder Task Collection

ModelBuilderContext is the shared, append-only collection every model
builder writes into during one pass. Once all builders have run,
`resolve()` checks every link against the collection and returns a
TaskGraph the executor can walk in dependency order.
"""

import logging
from typing import Dict, Iterator, List

from .exceptions import CircularDependencyError, DuplicateTaskError, ReferenceNotFoundError
from .tasks import Task

logger = logging.getLogger(__name__)


class ModelBuilderContext:
    """
    Insertion-ordered collection of tasks, keyed by "kind/name".
    """

    def __init__(self):
        self._tasks: Dict[str, Task] = {}

    def add_task(self, task: Task) -> Task:
        """
        Add a task to the collection.

        Adding a task equal to one already present is a no-op; adding a
        different task under an existing key raises DuplicateTaskError.
        Returns the task held by the collection.
        """
        existing = self._tasks.get(task.key)
        if existing is not None:
            if existing == task:
                logger.debug(f"[Context] Task '{task.key}' already present, merging.")
                return existing
            raise DuplicateTaskError(
                f"Task '{task.key}' was added twice with different definitions."
            )
        self._tasks[task.key] = task
        logger.debug(f"[Context] Added task '{task.key}'.")
        return task

    @property
    def tasks(self) -> Dict[str, Task]:
        return dict(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, key: str) -> bool:
        return key in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))

    def find(self, kind: str) -> List[Task]:
        """All tasks of one kind, in insertion order."""
        return [t for t in self._tasks.values() if t.kind == kind]

    def resolve(self) -> "TaskGraph":
        """
        Resolve every link of every task against the collection.

        Raises ReferenceNotFoundError for the first link whose target is
        missing, and CircularDependencyError if the links form a loop.
        """
        logger.debug(f"[Context] Resolving links across {len(self._tasks)} tasks...")
        dependencies: Dict[str, List[str]] = {}
        for key, task in self._tasks.items():
            deps: List[str] = []
            for link in task.links():
                if link.key not in self._tasks:
                    raise ReferenceNotFoundError(
                        f"Task '{key}' links to '{link.key}', which no builder produced."
                    )
                if link.key not in deps:
                    deps.append(link.key)
            dependencies[key] = deps
        graph = TaskGraph(dict(self._tasks), dependencies)
        graph.order()
        logger.debug("[Context] All links resolved.")
        return graph


class TaskGraph:
    """
    The resolved result of one build pass.
    """

    def __init__(self, tasks: Dict[str, Task], dependencies: Dict[str, List[str]]):
        self._tasks = tasks
        self._dependencies = dependencies

    @property
    def tasks(self) -> Dict[str, Task]:
        return dict(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __getitem__(self, key: str) -> Task:
        return self._tasks[key]

    def dependencies(self, key: str) -> List[str]:
        """Keys of the tasks `key` links to, in link order."""
        return list(self._dependencies[key])

    def order(self) -> List[str]:
        """
        Task keys with every task after the tasks it links to.

        Among tasks that are ready at the same time, insertion order wins,
        so the result only depends on the collection's contents.
        """
        position = {key: i for i, key in enumerate(self._tasks)}
        remaining = {key: set(deps) for key, deps in self._dependencies.items()}
        dependents: Dict[str, List[str]] = {key: [] for key in self._tasks}
        for key, deps in remaining.items():
            for dep in deps:
                dependents[dep].append(key)

        ready = sorted((k for k, deps in remaining.items() if not deps), key=position.__getitem__)
        ordered: List[str] = []
        while ready:
            key = ready.pop(0)
            ordered.append(key)
            for dependent in dependents[key]:
                remaining[dependent].discard(key)
                if not remaining[dependent]:
                    ready.append(dependent)
            ready.sort(key=position.__getitem__)

        if len(ordered) != len(self._tasks):
            stuck = sorted((k for k, deps in remaining.items() if deps), key=position.__getitem__)
            raise CircularDependencyError(f"Circular dependency between tasks: {', '.join(stuck)}")
        return ordered

    def dump(self) -> List[Dict]:
        """Every task as a plain dict, in insertion order."""
        return [task.to_dict() for task in self._tasks.values()]
