"""
Logging setup for the risk engine.

The engine itself only obtains named loggers; hosts call setup_logging() once
to route them to stderr and, optionally, to a log file kept next to a batch
report for troubleshooting.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.setLevel(level)
    return handler


class EnhancedLogger:
    """
    Owns the root logger configuration for the lifetime of a host session.

    The handlers and level found on the root logger at the first setup are
    saved and put back by cleanup().
    """

    def __init__(self):
        self.installed: List[logging.Handler] = []
        self.log_file_path: Optional[Path] = None
        self._saved_handlers: List[logging.Handler] = []
        self._saved_level: Optional[int] = None

    def setup_logging(self, verbose: bool = False, log_file: Optional[Union[str, Path]] = None) -> Optional[str]:
        """
        Route engine logs to stderr and, if requested, to a file.

        Args:
            verbose: Show INFO on the console instead of WARNING and above
            log_file: Optional path of a file that receives DEBUG and above

        Returns:
            Path to the log file, or None when only console logging is used
        """
        root = logging.getLogger()
        if self._saved_level is None:
            self._saved_handlers = list(root.handlers)
            self._saved_level = root.level
        self._close_installed(root)

        for handler in list(root.handlers):
            root.removeHandler(handler)
        root.setLevel(logging.DEBUG if log_file else logging.INFO)

        # stderr keeps stdout clean for JSON output from hosts
        console_level = logging.INFO if verbose else logging.WARNING
        self.installed.append(_handler(logging.StreamHandler(sys.stderr), console_level))

        self.log_file_path = Path(log_file) if log_file else None
        if self.log_file_path:
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.log_file_path, mode='w', encoding='utf-8')
            self.installed.append(_handler(file_handler, logging.DEBUG))

        for handler in self.installed:
            root.addHandler(handler)

        logger = logging.getLogger("enhanced.logging")
        logger.info(f"Logging initialized (console level: {logging.getLevelName(console_level)})")
        if self.log_file_path:
            logger.info(f"Writing debug log to {self.log_file_path}")

        return self.get_log_file_path()

    def log_batch_summary(self, total: int, analyzed: int, defaulted: int, execution_time: float):
        """Log one line describing a finished batch."""
        logging.getLogger("analysis.summary").info(
            f"Batch complete: {total} apps, {analyzed} analyzed, {defaulted} defaulted "
            f"in {execution_time:.2f}s"
        )

    def _close_installed(self, root: logging.Logger):
        for handler in self.installed:
            root.removeHandler(handler)
            handler.close()
        self.installed = []

    def cleanup(self):
        """Close the handlers installed by setup_logging and restore the root logger."""
        root = logging.getLogger()
        self._close_installed(root)

        if self._saved_level is not None:
            for handler in list(root.handlers):
                root.removeHandler(handler)
            for handler in self._saved_handlers:
                root.addHandler(handler)
            root.setLevel(self._saved_level)
            self._saved_handlers = []
            self._saved_level = None

    def get_log_file_path(self) -> Optional[str]:
        return str(self.log_file_path) if self.log_file_path else None


enhanced_logger = EnhancedLogger()


def setup_logging(verbose: bool = False, log_file: Optional[Union[str, Path]] = None) -> Optional[str]:
    """Configure logging through the shared EnhancedLogger."""
    return enhanced_logger.setup_logging(verbose=verbose, log_file=log_file)
