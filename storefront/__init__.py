"""Storefront client: cart state synchronization over a remote cart API."""

__version__ = "0.1.0"
