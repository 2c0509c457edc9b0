"""
Logging infrastructure for the risk engine.
"""

from .enhanced_logging import EnhancedLogger, enhanced_logger, setup_logging

__all__ = [
    'EnhancedLogger',
    'enhanced_logger',
    'setup_logging'
]
