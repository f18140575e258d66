"""
Edge components for DNS.

Components:
- DnsRecordComponent: Wildcard alias record for the load balancer
"""

from lamp_iac.components.edge.dns_record import DnsRecordComponent, DnsRecordOutputs

__all__ = [
    "DnsRecordComponent",
    "DnsRecordOutputs",
]
