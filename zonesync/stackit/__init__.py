"""STACKIT DNS API transport."""

from .client import StackitDNSClient

__all__ = ["StackitDNSClient"]
