"""
Load balancing components.

Components:
- AlbComponent: Internet-facing ALB, listener, target groups, host-header rules
"""

from lamp_iac.components.load_balancing.alb import AlbComponent, AlbOutputs

__all__ = [
    "AlbComponent",
    "AlbOutputs",
]
