"""
Centralized Schema Definitions
============================

This module provides centralized schema definitions for route processing.

The route segments schema defines the structure of the per-segment table
produced from a CycleStreets journey.
"""

from .route_segments import RouteSegments

__version__ = "1.0.0"
