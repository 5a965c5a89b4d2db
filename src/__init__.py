"""
restaurant-settings Package

Field-driven admin settings for restaurant websites: a catalog of editable
fields, validation, per-restaurant storage and a FastAPI surface.
"""

__version__ = "0.1.0"

__all__ = [
    "api",
    "core",
    "models",
    "services",
    "stores",
]
