"""Configuration management for the Tiation SDK."""

from .settings import Settings

__all__ = ["Settings"]
