"""
File-backed metadata provider.

Reads a YAML or JSON document holding either a list of app records or a
mapping with an "apps" list. Records use the same keys AppMetadata.from_dict
accepts, snake_case or bridge camelCase. Records are coerced on access, so a
single malformed entry only fails its own lookup.
"""

from pathlib import Path
from typing import Any, Dict, List, Union
import json
import logging

import yaml

from apprisk_core.infrastructure.shared.error_handling import MissingMetadataError
from apprisk_core.logic.models import AppMetadata
from .base_provider import AppMetadataProvider, ProviderError

_ID_KEYS = ('package_identifier', 'packageIdentifier', 'packageName')


class FileMetadataProvider(AppMetadataProvider):
    """Serves app records loaded from a YAML or JSON file."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)
        self.logger = logging.getLogger("provider.file")
        self._records: Dict[str, Dict[str, Any]] = self._load()

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.file_path.exists():
            raise ProviderError(f"Metadata file not found: {self.file_path}")

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                if self.file_path.suffix.lower() in ['.yml', '.yaml']:
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ProviderError(f"Could not read metadata file {self.file_path}: {e}") from e

        if isinstance(data, dict):
            data = data.get('apps', [])
        if data is None:
            data = []
        if not isinstance(data, list):
            raise ProviderError(f"Metadata file {self.file_path} must hold a list of app records")

        records: Dict[str, Dict[str, Any]] = {}
        for position, record in enumerate(data):
            package_identifier = None
            if isinstance(record, dict):
                package_identifier = next((record[k] for k in _ID_KEYS if record.get(k)), None)
            if not package_identifier:
                self.logger.warning(f"Skipping record {position} in {self.file_path.name}: no package identifier")
                continue
            records[str(package_identifier)] = record

        self.logger.info(f"Loaded {len(records)} app records from {self.file_path}")
        return records

    def list_packages(self) -> List[str]:
        return list(self._records)

    def get_metadata(self, package_identifier: str) -> AppMetadata:
        record = self._records.get(package_identifier)
        if record is None:
            raise MissingMetadataError(package_identifier, f"not present in {self.file_path.name}")
        return AppMetadata.from_dict(record)
