# chainlog - core
"""Configuration shared by the logging package"""

from .config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
