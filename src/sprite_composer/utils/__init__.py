# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging, console tables, common helpers

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration and progress display
- Rich console tables for run summaries
- Shared helpers used across layers

Data Flow: Supporting services for all other layers
"""

from . import logging

__all__ = [
    "logging",
]
