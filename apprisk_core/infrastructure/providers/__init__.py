"""
App metadata providers.
"""

from .base_provider import AppMetadataProvider, ProviderError
from .memory_provider import InMemoryMetadataProvider
from .file_provider import FileMetadataProvider

__all__ = [
    'AppMetadataProvider',
    'ProviderError',
    'InMemoryMetadataProvider',
    'FileMetadataProvider',
]
