"""scenewire: declarative dependency injection for hierarchical scene graphs."""

from scenewire.graph import Attachment, GraphHost, Node, SceneGraph
from scenewire.injection import (
    DependencyResolver,
    Disambiguation,
    ForceInject,
    Inject,
    SearchScope,
    capability,
    implements,
)

__version__ = "0.1.0"

__all__ = [
    "Attachment",
    "DependencyResolver",
    "Disambiguation",
    "ForceInject",
    "GraphHost",
    "Inject",
    "Node",
    "SceneGraph",
    "SearchScope",
    "capability",
    "implements",
]
