"""Force field implementations."""

from .lj import ForceResult, LennardJonesForce

__all__ = ["ForceResult", "LennardJonesForce"]
