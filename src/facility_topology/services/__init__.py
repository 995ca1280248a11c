"""Service clients for the Digital Twins management API."""

from .topology_client import TopologyClient

__all__ = [
    "TopologyClient",
]
