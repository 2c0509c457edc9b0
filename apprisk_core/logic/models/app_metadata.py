"""
App metadata domain model.

AppMetadata is the immutable record of static facts about one installed app,
as supplied by an AppMetadataProvider. Missing or null fields are recovered
to their empty/unknown value instead of failing the analysis.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional

from apprisk_core.infrastructure.shared.error_handling import MalformedInputError


class InstallSource(Enum):
    """Installation channel of an app."""
    SIDELOADED = "sideloaded"
    STORE = "store"
    THIRD_PARTY_STORE = "third_party_store"


class AppCategory:
    """Fixed vocabulary produced by the category classifier."""
    CAMERA = "camera"
    MESSAGING = "messaging"
    SOCIAL = "social"
    COMMUNICATION = "communication"
    LOCATION = "location"
    GAME = "game"
    UTILITY = "utility"
    UNKNOWN = "unknown"

    ALL = (CAMERA, MESSAGING, SOCIAL, COMMUNICATION, LOCATION, GAME, UTILITY, UNKNOWN)


# camelCase bridge keys accepted by from_dict
_FIELD_ALIASES = {
    'packageIdentifier': 'package_identifier',
    'packageName': 'package_identifier',
    'displayName': 'display_name',
    'appName': 'display_name',
    'requestedPermissions': 'requested_permissions',
    'permissions': 'requested_permissions',
    'isSystemApp': 'is_system_app',
    'isPrivilegedPartition': 'is_privileged_partition',
    'isDebuggable': 'is_debuggable',
    'isTestOnly': 'is_test_only',
    'installerIdentifier': 'installer_identifier',
    'installer': 'installer_identifier',
    'targetSdkVersion': 'target_sdk_version',
    'targetSdk': 'target_sdk_version',
    'lastUpdateTimestamp': 'last_update_timestamp',
    'updateTime': 'last_update_timestamp',
    'backgroundServiceCount': 'background_service_count',
    'installedSizeBytes': 'installed_size_bytes',
}


def _coerce_int(name: str, value: Any, default: Optional[int] = 0) -> Optional[int]:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise MalformedInputError(f"Field {name} must be an integer, got bool")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Field {name} must be an integer, got {value!r}") from e


def _coerce_permissions(value: Any) -> FrozenSet[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        raise MalformedInputError("requested_permissions must be a collection of identifiers, not a string")
    try:
        return frozenset(str(p).strip() for p in value if p is not None and str(p).strip())
    except TypeError as e:
        raise MalformedInputError(f"requested_permissions is not iterable: {value!r}") from e


@dataclass(frozen=True)
class AppMetadata:
    """Static facts about a single installed application."""
    package_identifier: str
    display_name: str = ""
    requested_permissions: FrozenSet[str] = field(default_factory=frozenset)

    is_system_app: bool = False
    is_privileged_partition: bool = False
    is_debuggable: bool = False
    is_test_only: bool = False

    # None or "" means the app was sideloaded
    installer_identifier: Optional[str] = None

    target_sdk_version: int = 0
    # Epoch millis, 0 when unknown
    last_update_timestamp: int = 0
    background_service_count: int = 0
    installed_size_bytes: Optional[int] = None

    def __post_init__(self):
        """Recover malformed fields to their empty/unknown values."""
        if not isinstance(self.package_identifier, str) or not self.package_identifier.strip():
            raise MalformedInputError("AppMetadata requires a non-empty package_identifier")

        set_ = object.__setattr__
        set_(self, 'package_identifier', self.package_identifier.strip())
        set_(self, 'display_name', str(self.display_name) if self.display_name is not None else "")
        set_(self, 'requested_permissions', _coerce_permissions(self.requested_permissions))

        for flag in ('is_system_app', 'is_privileged_partition', 'is_debuggable', 'is_test_only'):
            set_(self, flag, bool(getattr(self, flag)))

        installer = self.installer_identifier
        set_(self, 'installer_identifier', (str(installer).strip() or None) if installer else None)

        set_(self, 'target_sdk_version', _coerce_int('target_sdk_version', self.target_sdk_version))
        set_(self, 'last_update_timestamp', _coerce_int('last_update_timestamp', self.last_update_timestamp))
        set_(self, 'background_service_count', _coerce_int('background_service_count', self.background_service_count))
        set_(self, 'installed_size_bytes', _coerce_int('installed_size_bytes', self.installed_size_bytes, default=None))

    @property
    def label(self) -> str:
        """Display name, falling back to the package identifier."""
        return self.display_name or self.package_identifier

    @property
    def has_installer(self) -> bool:
        return bool(self.installer_identifier)

    @property
    def formatted_size(self) -> str:
        """Human readable installed size."""
        return format_file_size(self.installed_size_bytes)

    def has_permission(self, permission_id: str) -> bool:
        return permission_id in self.requested_permissions

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppMetadata':
        """
        Create metadata from a dictionary using snake_case or bridge camelCase keys.

        Unknown keys are ignored. Raises MalformedInputError if data is not a
        mapping or lacks a package identifier.
        """
        if not isinstance(data, dict):
            raise MalformedInputError(f"AppMetadata record must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value

        if 'package_identifier' not in kwargs:
            raise MalformedInputError("AppMetadata record is missing package_identifier")

        # null booleans mean "not set"
        for flag in ('is_system_app', 'is_privileged_partition', 'is_debuggable', 'is_test_only'):
            if flag in kwargs and kwargs[flag] is None:
                kwargs[flag] = False

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary (camelCase) for serialization."""
        return {
            'packageIdentifier': self.package_identifier,
            'displayName': self.display_name,
            'requestedPermissions': sorted(self.requested_permissions),
            'isSystemApp': self.is_system_app,
            'isPrivilegedPartition': self.is_privileged_partition,
            'isDebuggable': self.is_debuggable,
            'isTestOnly': self.is_test_only,
            'installerIdentifier': self.installer_identifier,
            'targetSdkVersion': self.target_sdk_version,
            'lastUpdateTimestamp': self.last_update_timestamp,
            'backgroundServiceCount': self.background_service_count,
            'installedSizeBytes': self.installed_size_bytes,
        }


def format_file_size(size_bytes: Optional[int]) -> str:
    """Format a byte count as B/KB/MB, or "Unknown"."""
    if size_bytes is None or size_bytes < 0:
        return "Unknown"
    if size_bytes >= 1024 * 1024:
        return f"{size_bytes / (1024.0 * 1024.0):.1f} MB"
    if size_bytes >= 1024:
        return f"{size_bytes / 1024.0:.1f} KB"
    return f"{size_bytes} B"


def permission_short_name(permission_id: str) -> str:
    """Last dotted segment of a permission identifier."""
    return permission_id.rsplit(".", 1)[-1]


def as_permission_set(permissions: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Normalize an optional permission collection to a frozenset."""
    return _coerce_permissions(permissions)
