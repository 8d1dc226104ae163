"""
Routers Package
===============

Routers are like the reception desk - they direct incoming requests
to the right place.
"""

from .readings import router as readings_router, set_reading_store
from .voice import router as voice_router, set_command_dispatcher

__all__ = [
    "readings_router",
    "voice_router",
    "set_reading_store",
    "set_command_dispatcher",
]
