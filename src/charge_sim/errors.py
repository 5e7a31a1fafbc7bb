# MIT License (see LICENSE)
"""Exceptions raised by the charge simulation."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """
    Invalid simulation configuration.

    Raised synchronously by the call that received the bad value. The
    simulation state is left exactly as it was before the call.
    """
