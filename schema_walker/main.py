"""
Main entry point for graph-schema-walker.

Creates the FastAPI application instance for uvicorn.
"""

from schema_walker.api.app import create_app
from schema_walker.core.config import get_settings
from schema_walker.core.logging import setup_structured_logging

settings = get_settings()
setup_structured_logging(settings)

# Create application instance
app = create_app(settings=settings)
