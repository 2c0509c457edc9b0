"""
Infrastructure layer: logging, error handling and metadata providers.

Providers are imported from apprisk_core.infrastructure.providers directly;
they depend on the domain models, which themselves depend on shared.
"""
