"""Host documents — one per backing document model."""

from parahouse.host.base import HostDocument
from parahouse.host.ifc import IfcHostDocument
from parahouse.host.memory import MemoryElement, MemoryHostDocument, MemoryType

HOST_REGISTRY: dict[str, type[HostDocument]] = {
    "ifc": IfcHostDocument,
    "memory": MemoryHostDocument,
}


def get_host(name: str) -> type[HostDocument]:
    """Return the host document class registered under *name*."""
    host_cls = HOST_REGISTRY.get(name)
    if host_cls is None:
        raise KeyError(f"Unknown host {name!r}; expected one of {sorted(HOST_REGISTRY)}")
    return host_cls


__all__ = [
    "HostDocument",
    "IfcHostDocument",
    "MemoryElement",
    "MemoryHostDocument",
    "MemoryType",
    "HOST_REGISTRY",
    "get_host",
]
