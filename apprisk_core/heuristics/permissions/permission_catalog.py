"""
Permission catalog.

Static reference data mapping well-known permission identifiers to a risk
tier, a human category and a description. Only HIGH and MEDIUM tier entries
contribute points; LOW entries exist for display.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from apprisk_core.heuristics.base import BaseEvaluator
from apprisk_core.infrastructure.shared.error_handling import ConfigurationError
from apprisk_core.logic.models import PermissionTier, permission_short_name


DEFAULT_PERMISSION_CATALOG: Dict[str, Dict[str, Any]] = {
    # High-risk permissions
    "android.permission.CAMERA": {
        "tier": PermissionTier.HIGH,
        "category": "Camera",
        "description": "Take photos and videos"
    },
    "android.permission.RECORD_AUDIO": {
        "tier": PermissionTier.HIGH,
        "category": "Microphone",
        "description": "Record audio from microphone"
    },
    "android.permission.ACCESS_FINE_LOCATION": {
        "tier": PermissionTier.HIGH,
        "category": "Location",
        "description": "Access precise GPS location"
    },
    "android.permission.ACCESS_COARSE_LOCATION": {
        "tier": PermissionTier.HIGH,
        "category": "Location",
        "description": "Access approximate location"
    },
    "android.permission.READ_CONTACTS": {
        "tier": PermissionTier.HIGH,
        "category": "Contacts",
        "description": "Read your contacts"
    },
    "android.permission.WRITE_CONTACTS": {
        "tier": PermissionTier.HIGH,
        "category": "Contacts",
        "description": "Modify your contacts"
    },
    "android.permission.READ_SMS": {
        "tier": PermissionTier.HIGH,
        "category": "SMS",
        "description": "Read your text messages"
    },
    "android.permission.SEND_SMS": {
        "tier": PermissionTier.HIGH,
        "category": "SMS",
        "description": "Send text messages"
    },
    "android.permission.READ_CALL_LOG": {
        "tier": PermissionTier.HIGH,
        "category": "Phone",
        "description": "Read call history"
    },
    "android.permission.PROCESS_OUTGOING_CALLS": {
        "tier": PermissionTier.HIGH,
        "category": "Phone",
        "description": "Monitor outgoing calls"
    },
    # Medium-risk permissions
    "android.permission.READ_EXTERNAL_STORAGE": {
        "tier": PermissionTier.MEDIUM,
        "category": "Storage",
        "description": "Read files from storage"
    },
    "android.permission.WRITE_EXTERNAL_STORAGE": {
        "tier": PermissionTier.MEDIUM,
        "category": "Storage",
        "description": "Write files to storage"
    },
    "android.permission.INTERNET": {
        "tier": PermissionTier.MEDIUM,
        "category": "Network",
        "description": "Full network access"
    },
    "android.permission.ACCESS_NETWORK_STATE": {
        "tier": PermissionTier.MEDIUM,
        "category": "Network",
        "description": "View network connections"
    },
    "android.permission.READ_PHONE_STATE": {
        "tier": PermissionTier.MEDIUM,
        "category": "Phone",
        "description": "Read phone status and identity"
    },
    "android.permission.BLUETOOTH": {
        "tier": PermissionTier.MEDIUM,
        "category": "Bluetooth",
        "description": "Pair with Bluetooth devices"
    },
    # Scored by the runtime evaluator, not per permission
    "android.permission.BIND_ACCESSIBILITY_SERVICE": {
        "tier": PermissionTier.LOW,
        "category": "Accessibility",
        "description": "Read and control screen content"
    },
    "android.permission.SYSTEM_ALERT_WINDOW": {
        "tier": PermissionTier.LOW,
        "category": "Overlay",
        "description": "Draw over other apps"
    },
    "android.permission.RECEIVE_BOOT_COMPLETED": {
        "tier": PermissionTier.LOW,
        "category": "Other",
        "description": "Start at device boot"
    },
    "android.permission.ACCESS_WIFI_STATE": {
        "tier": PermissionTier.LOW,
        "category": "Network",
        "description": "View Wi-Fi connections"
    },
    "android.permission.CHANGE_WIFI_STATE": {
        "tier": PermissionTier.LOW,
        "category": "Network",
        "description": "Connect and disconnect from Wi-Fi"
    },
    "android.permission.BLUETOOTH_ADMIN": {
        "tier": PermissionTier.LOW,
        "category": "Bluetooth",
        "description": "Access Bluetooth settings"
    },
    "android.permission.READ_CALENDAR": {
        "tier": PermissionTier.LOW,
        "category": "Calendar",
        "description": "Read calendar events"
    },
    "android.permission.BODY_SENSORS": {
        "tier": PermissionTier.LOW,
        "category": "Sensors",
        "description": "Access body sensors"
    },
    "android.permission.RECEIVE_SMS": {
        "tier": PermissionTier.LOW,
        "category": "SMS",
        "description": "Receive text messages"
    },
    "android.permission.RECEIVE_MMS": {
        "tier": PermissionTier.LOW,
        "category": "SMS",
        "description": "Receive multimedia messages"
    },
    "android.permission.ACCESS_BACKGROUND_LOCATION": {
        "tier": PermissionTier.LOW,
        "category": "Location",
        "description": "Access location in the background"
    },
    "android.permission.CALL_PHONE": {
        "tier": PermissionTier.LOW,
        "category": "Phone",
        "description": "Directly call phone numbers"
    },
    "android.permission.ANSWER_PHONE_CALLS": {
        "tier": PermissionTier.LOW,
        "category": "Phone",
        "description": "Answer incoming calls"
    },
    "android.permission.WRITE_CALL_LOG": {
        "tier": PermissionTier.LOW,
        "category": "Phone",
        "description": "Modify call history"
    },
    "android.permission.CHANGE_NETWORK_STATE": {
        "tier": PermissionTier.LOW,
        "category": "Network",
        "description": "Change network connectivity"
    },
}

UNKNOWN_CATEGORY = "Other"
UNKNOWN_DESCRIPTION = "System permission"

_TIER_ORDER = {PermissionTier.HIGH: 0, PermissionTier.MEDIUM: 1, PermissionTier.LOW: 2}


@dataclass(frozen=True)
class PermissionInfo:
    """Catalog entry for one permission."""
    tier: PermissionTier
    category: str
    description: str


@dataclass(frozen=True)
class PermissionDetail:
    """Catalog entry bound to the permission it describes."""
    permission: str
    short_name: str
    tier: PermissionTier
    category: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.permission,
            'shortName': self.short_name,
            'risk': self.tier.value,
            'category': self.category,
            'description': self.description,
        }


UNKNOWN_PERMISSION = PermissionInfo(PermissionTier.LOW, UNKNOWN_CATEGORY, UNKNOWN_DESCRIPTION)


class PermissionCatalog(BaseEvaluator):
    """Total lookup from permission identifier to tier, category and description."""

    def __init__(self, table: Optional[Mapping[str, Mapping[str, Any]]] = None):
        super().__init__()
        table = DEFAULT_PERMISSION_CATALOG if table is None else table
        if not table:
            raise ConfigurationError("Permission catalog is empty")

        self._entries: Dict[str, PermissionInfo] = {}
        for permission_id, entry in table.items():
            try:
                tier = entry["tier"]
                if not isinstance(tier, PermissionTier):
                    tier = PermissionTier(str(tier).upper())
                self._entries[permission_id] = PermissionInfo(
                    tier=tier,
                    category=entry.get("category", UNKNOWN_CATEGORY),
                    description=entry.get("description", UNKNOWN_DESCRIPTION),
                )
            except (KeyError, ValueError, AttributeError) as e:
                raise ConfigurationError(f"Invalid catalog entry for {permission_id}: {e}") from e

    @property
    def name(self) -> str:
        return "permission_catalog"

    @property
    def category(self) -> str:
        return "Permission"

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, permission_id: str) -> bool:
        return permission_id in self._entries

    def classify(self, permission_id: str) -> PermissionInfo:
        """Look up a permission. Unknown identifiers are LOW/Other/"System permission"."""
        return self._entries.get(permission_id, UNKNOWN_PERMISSION)

    def tier_of(self, permission_id: str) -> PermissionTier:
        return self.classify(permission_id).tier

    def describe(self, permission_id: str) -> PermissionDetail:
        info = self.classify(permission_id)
        return PermissionDetail(
            permission=permission_id,
            short_name=permission_short_name(permission_id),
            tier=info.tier,
            category=info.category,
            description=info.description,
        )

    def describe_all(self, permissions: Iterable[str]) -> List[PermissionDetail]:
        """Detailed view of a permission set, highest tier first."""
        details = [self.describe(p) for p in set(permissions)]
        return sorted(details, key=lambda d: (_TIER_ORDER[d.tier], d.permission))

    def count_by_tier(self, permissions: Iterable[str]) -> Dict[PermissionTier, int]:
        counts = {tier: 0 for tier in PermissionTier}
        for permission_id in permissions:
            counts[self.tier_of(permission_id)] += 1
        return counts
