"""Core value objects."""

from .no_value import NO_VALUE, has_value

__all__ = ["NO_VALUE", "has_value"]
