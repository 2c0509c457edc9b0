"""
Error taxonomy and the service that records per-app failures.

Only ConfigurationError is fatal. Everything else raised while assessing one
app is recorded here and turned into a defaulted assessment by the caller, so
a batch degrades instead of aborting.

Taxonomy:
- MissingMetadataError: a package's facts are unavailable (uninstalled mid-scan)
- MalformedInputError: an input record could not be coerced into AppMetadata
- ConfigurationError: reference tables or policy are empty or unloadable
"""

import logging
import threading
import traceback
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class AppRiskError(Exception):
    """Base class for all engine errors."""


class MissingMetadataError(AppRiskError):
    """Raised when the metadata for a package cannot be obtained."""

    def __init__(self, package_identifier: str, reason: str = "metadata unavailable"):
        self.package_identifier = package_identifier
        self.reason = reason
        super().__init__(f"{package_identifier}: {reason}")


class MalformedInputError(AppRiskError):
    """Raised when an input record cannot be turned into AppMetadata."""


class ConfigurationError(AppRiskError):
    """Raised when reference data or policy configuration is unusable."""


class ErrorSeverity(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        return getattr(logging, self.name)


@dataclass
class ErrorContext:
    """Where a failure happened: the operation, the component and free-form details."""
    operation: str
    component: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def package(self) -> Optional[str]:
        return self.metadata.get('package')


@dataclass
class ErrorInfo:
    """One recorded failure."""
    severity: ErrorSeverity
    message: str
    exception: Optional[BaseException]
    context: ErrorContext
    stack_trace: Optional[str] = None
    recovered: bool = False

    def __post_init__(self):
        if self.exception is not None and not self.stack_trace:
            self.stack_trace = "".join(
                traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
            )

    @property
    def stats_key(self) -> str:
        return f"{self.context.component}_{self.severity.value}"

    @property
    def is_fatal(self) -> bool:
        return isinstance(self.exception, ConfigurationError)


class ErrorHandler(ABC):
    """Receives recorded failures; the first handler that accepts one wins."""

    @abstractmethod
    def can_handle(self, error_info: ErrorInfo) -> bool:
        pass

    @abstractmethod
    def handle(self, error_info: ErrorInfo) -> bool:
        """Process the failure. Return True once it has been dealt with."""
        pass


class LoggingErrorHandler(ErrorHandler):
    """Writes every failure to a logger at the level matching its severity."""

    def __init__(self, logger_name: str = "error.handler"):
        self.logger = logging.getLogger(logger_name)

    def can_handle(self, error_info: ErrorInfo) -> bool:
        return True

    def handle(self, error_info: ErrorInfo) -> bool:
        context = error_info.context
        text = f"[{context.component}] {context.operation}: {error_info.message}"
        if context.metadata:
            text += f" | Metadata: {context.metadata}"

        # Tracebacks only for failures that need investigating
        with_trace = error_info.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL)
        self.logger.log(
            error_info.severity.log_level,
            text,
            exc_info=error_info.exception if with_trace else None,
        )
        return True


class ErrorHandlingService:
    """
    Records failures, dispatches them to handlers and keeps counts per
    component and severity. Safe to use from the batch worker threads.
    """

    def __init__(self, handlers: Optional[List[ErrorHandler]] = None):
        self.handlers: List[ErrorHandler] = list(handlers) if handlers is not None else [LoggingErrorHandler()]
        self._counts: Dict[str, int] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger("error.handling.service")

    def add_handler(self, handler: ErrorHandler) -> None:
        self.handlers.append(handler)

    def handle_error(self, error_info: ErrorInfo) -> bool:
        """
        Count the failure and offer it to the handlers in order.

        Args:
            error_info: The failure to dispatch

        Returns:
            Whether any handler dealt with it
        """
        with self._lock:
            self._counts[error_info.stats_key] = self._counts.get(error_info.stats_key, 0) + 1

        for handler in self.handlers:
            if not handler.can_handle(error_info):
                continue
            try:
                error_info.recovered = bool(handler.handle(error_info))
            except Exception as handler_error:
                self.logger.error(f"Error handler {type(handler).__name__} failed: {handler_error}")
                continue
            if error_info.recovered:
                break

        return error_info.recovered

    def record(self, exception: BaseException, operation: str, component: str,
               severity: ErrorSeverity = ErrorSeverity.WARNING, **metadata) -> ErrorInfo:
        """Wrap an exception caught while assessing an app and dispatch it."""
        error_info = ErrorInfo(
            severity=severity,
            message=str(exception) or type(exception).__name__,
            exception=exception,
            context=self.create_error_context(operation, component, **metadata),
        )
        self.handle_error(error_info)
        return error_info

    def create_error_context(self, operation: str, component: str, **metadata) -> ErrorContext:
        return ErrorContext(operation=operation, component=component, metadata=metadata)

    def get_error_stats(self) -> Dict[str, int]:
        """Failure counts keyed "<component>_<severity>"."""
        with self._lock:
            return dict(self._counts)

    def reset_error_stats(self) -> None:
        with self._lock:
            self._counts.clear()


_error_service = ErrorHandlingService()


def get_error_service() -> ErrorHandlingService:
    """Process-wide service used when callers do not supply their own."""
    return _error_service


@contextmanager
def error_context(operation: str, component: str, service: Optional[ErrorHandlingService] = None, **metadata):
    """
    Record any exception escaping the block, then re-raise it.

    ConfigurationError is recorded as CRITICAL, everything else as ERROR.
    """
    service = service or _error_service
    context = service.create_error_context(operation, component, **metadata)

    try:
        yield context
    except Exception as e:
        error_info = ErrorInfo(severity=ErrorSeverity.ERROR, message=str(e), exception=e, context=context)
        if error_info.is_fatal:
            error_info.severity = ErrorSeverity.CRITICAL
        service.handle_error(error_info)
        raise
