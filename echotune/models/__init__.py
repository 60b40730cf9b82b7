"""
Data Models Layer.

This package contains Pydantic models that define the core data structures
used throughout the application, such as configuration and catalog records.
"""

from .config import AppConfig
from .station import Country, Station

__all__ = ["AppConfig", "Country", "Station"]
