"""Domain models for the snippet store."""

import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


@dataclass(eq=False)
class HeadingNode:
    """A heading in a parsed outline document.

    The root of a tree has level 0 and an empty title. ``body`` holds the text
    directly under the heading, without any child headings.
    """

    level: int
    title: str
    body: str = ""
    children: list["HeadingNode"] = field(default_factory=list, repr=False)
    _parent: "weakref.ReferenceType[HeadingNode] | None" = field(
        default=None, repr=False, init=False
    )

    @property
    def parent(self) -> "HeadingNode | None":
        return self._parent() if self._parent is not None else None

    def add_child(self, child: "HeadingNode") -> None:
        child._parent = weakref.ref(self)
        self.children.append(child)

    def walk(self) -> Iterator["HeadingNode"]:
        """Yield all descendants in document order (the node itself excluded)."""
        for child in self.children:
            yield child
            yield from child.walk()


@dataclass(frozen=True)
class Snippet:
    """A named piece of reusable text inside a category."""

    category: str
    name: str
    body: str

    def __iter__(self) -> Iterator[str]:
        # Unpacks as a (name, body) pair.
        yield self.name
        yield self.body


class SelectionState(Enum):
    """How the current category of an editing context was chosen."""

    UNSET = "unset"
    AUTO_RESOLVED = "auto"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class CategoryBinding:
    """The category bound to an editing context, and how it got there."""

    state: SelectionState
    category: str | None = None
