"""
Gavel - API Services
====================

Author: Gavel contributors
"""

from gavel.api.services.auth import AuthService, get_auth_service, init_auth_service

__all__ = ["AuthService", "get_auth_service", "init_auth_service"]
