"""
Shared infrastructure utilities.
"""

from .error_handling import (
    AppRiskError,
    MissingMetadataError,
    MalformedInputError,
    ConfigurationError,
    ErrorSeverity,
    ErrorContext,
    ErrorInfo,
    ErrorHandler,
    LoggingErrorHandler,
    ErrorHandlingService,
    get_error_service,
    error_context,
)

__all__ = [
    'AppRiskError',
    'MissingMetadataError',
    'MalformedInputError',
    'ConfigurationError',
    'ErrorSeverity',
    'ErrorContext',
    'ErrorInfo',
    'ErrorHandler',
    'LoggingErrorHandler',
    'ErrorHandlingService',
    'get_error_service',
    'error_context',
]
