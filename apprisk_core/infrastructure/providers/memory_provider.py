"""
In-memory metadata provider.
"""

from typing import Any, Dict, Iterable, List, Union

from apprisk_core.infrastructure.shared.error_handling import MissingMetadataError
from apprisk_core.logic.models import AppMetadata
from .base_provider import AppMetadataProvider


class InMemoryMetadataProvider(AppMetadataProvider):
    """Serves records held in memory, keyed by package identifier."""

    def __init__(self, records: Iterable[Union[AppMetadata, Dict[str, Any]]] = ()):
        self._records: Dict[str, AppMetadata] = {}
        for record in records:
            self.add(record)

    def add(self, record: Union[AppMetadata, Dict[str, Any]]) -> AppMetadata:
        metadata = record if isinstance(record, AppMetadata) else AppMetadata.from_dict(record)
        self._records[metadata.package_identifier] = metadata
        return metadata

    def remove(self, package_identifier: str) -> None:
        """Forget a package, as if it were uninstalled."""
        self._records.pop(package_identifier, None)

    def list_packages(self) -> List[str]:
        return list(self._records)

    def get_metadata(self, package_identifier: str) -> AppMetadata:
        try:
            return self._records[package_identifier]
        except KeyError:
            raise MissingMetadataError(package_identifier, "package not installed") from None
