"""Endpoint handlers and the SDKWA facade."""

from .sdkwa_messenger import SDKWA

__all__ = ["SDKWA"]
