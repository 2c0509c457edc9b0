"""
Base metadata provider interface.

The engine never enumerates installed apps itself. A provider supplies the
package list and the static facts of each package; on a device this is the
package manager, in tests and offline runs it is memory or a file.
"""

from abc import ABC, abstractmethod
from typing import List

from apprisk_core.infrastructure.shared.error_handling import AppRiskError
from apprisk_core.logic.models import AppMetadata


class ProviderError(AppRiskError):
    """Raised when a provider cannot be loaded at all."""
    pass


class AppMetadataProvider(ABC):
    """Source of AppMetadata records."""

    @abstractmethod
    def list_packages(self) -> List[str]:
        """Get the identifiers of all installed packages, in enumeration order."""
        pass

    @abstractmethod
    def get_metadata(self, package_identifier: str) -> AppMetadata:
        """
        Get the facts for one package.

        Raises:
            MissingMetadataError: if the package is unknown or has disappeared
            MalformedInputError: if the stored record cannot be coerced
        """
        pass
