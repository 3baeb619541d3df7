"""Mini README: Core package initializer for the Pizzadrone delivery service.

This module exposes convenience imports so that scripts and the web
interface can reach the logging helpers without knowing the module layout.
The route planning core lives in :mod:`pizzadrone.route_planning` and has no
web framework dependencies.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
