"""
Gavel - Services Package
========================

Application services built on the core package.

Author: Gavel contributors
"""

from .appeals import AppealService

__all__ = ["AppealService"]
