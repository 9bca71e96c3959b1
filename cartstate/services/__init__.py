"""Adapters for the remote cart service."""
from .cart_client import HttpCartService

__all__ = ["HttpCartService"]
