"""Relay to the local application server and its process lifecycle."""

from .delegate import DelegateProcess
from .forwarder import DelegationForwarder, filter_hop_by_hop

__all__ = [
    "DelegateProcess",
    "DelegationForwarder",
    "filter_hop_by_hop",
]
