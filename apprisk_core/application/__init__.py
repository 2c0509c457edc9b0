"""
Application layer for the app risk engine.

This module contains the use cases that connect a metadata provider to the
analysis service.
"""

from .analyze_installed_apps import AnalyzeInstalledAppsUseCase

__all__ = [
    'AnalyzeInstalledAppsUseCase'
]
