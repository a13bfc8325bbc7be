"""
HTTP API for the schema walker.

Exposes:
- create_app: FastAPI application factory
- ServiceContainer / build_services: dependency wiring
"""

from schema_walker.api.app import create_app
from schema_walker.api.dependencies import (
    ServiceConfig,
    ServiceContainer,
    build_services,
)

__all__ = [
    "create_app",
    "ServiceConfig",
    "ServiceContainer",
    "build_services",
]
