"""
Infra Builder Task Base

A task describes one infrastructure object for the executor to create or
update. Tasks point at each other through `Link` values, which carry only
the kind and name of their target and are resolved once every builder in a
pass has run.
"""

from typing import Any, ClassVar, Dict, Iterator

from pydantic import BaseModel, ConfigDict


class Link(BaseModel):
    """A named, lazily resolved reference to another task."""
    model_config = ConfigDict(frozen=True)

    kind: str
    name: str

    @property
    def key(self) -> str:
        return f"{self.kind}/{self.name}"

    def __str__(self) -> str:
        return self.key


class Task(BaseModel):
    """
    Base class for every resource task.

    Subclasses set `kind`; instances are immutable so that two builders
    emitting the same task compare equal and merge in the collection.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ClassVar[str] = "Task"

    name: str

    @classmethod
    def link(cls, name: str) -> Link:
        return Link(kind=cls.kind, name=name)

    @property
    def key(self) -> str:
        return f"{self.kind}/{self.name}"

    def links(self) -> Iterator[Link]:
        """Yield every link held by this task, in field order."""
        for field_name in type(self).model_fields:
            yield from _iter_links(getattr(self, field_name))

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", exclude_none=True)
        return {"kind": self.kind, **data}


def _iter_links(value: Any) -> Iterator[Link]:
    if isinstance(value, Link):
        yield value
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _iter_links(item)
    elif isinstance(value, dict):
        for item in value.values():
            yield from _iter_links(item)
    elif isinstance(value, BaseModel):
        for field_name in type(value).model_fields:
            yield from _iter_links(getattr(value, field_name))
