"""
Category Classifier - infers a coarse functional category for an app.

The category is what makes a permission request expected or anomalous: a
camera permission is normal for a photo app and unusual for a calculator.
Keyword sets are tested in a fixed priority order and the first set with a
substring hit in the package identifier or display name wins.
"""

from typing import Optional, Sequence, Tuple

from apprisk_core.heuristics.base import BaseEvaluator
from apprisk_core.logic.models import AppCategory


# Order is significant: "WhatsApp Camera" must classify as camera
DEFAULT_CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (AppCategory.CAMERA, ("camera", "photo", "video", "scanner", "qr", "barcode")),
    (AppCategory.MESSAGING, ("message", "sms", "chat", "whatsapp", "telegram", "messenger", "signal")),
    (AppCategory.SOCIAL, ("social", "facebook", "instagram", "twitter", "tiktok", "snapchat")),
    (AppCategory.COMMUNICATION, ("phone", "dialer", "call", "zoom", "meet", "teams", "skype")),
    (AppCategory.LOCATION, ("map", "navigation", "gps", "uber", "lyft", "delivery", "weather")),
    (AppCategory.GAME, ("game",)),
    (AppCategory.UTILITY, ("flashlight", "calculator")),
)


class CategoryClassifier(BaseEvaluator):
    """Keyword-based app category inference."""

    def __init__(self, keywords: Optional[Sequence[Tuple[str, Sequence[str]]]] = None):
        super().__init__()
        keywords = DEFAULT_CATEGORY_KEYWORDS if keywords is None else keywords
        self.keywords = tuple((category, tuple(k.lower() for k in words)) for category, words in keywords)

    @property
    def name(self) -> str:
        return "category_classifier"

    @property
    def category(self) -> str:
        return "Context"

    def classify(self, package_identifier: str, display_name: str = "") -> str:
        """
        Classify an app from its package identifier and display name.

        Returns:
            One of the AppCategory values, "unknown" when nothing matches
        """
        package = (package_identifier or "").lower()
        label = (display_name or "").lower()

        for category, words in self.keywords:
            if any(word in package or word in label for word in words):
                return category

        return AppCategory.UNKNOWN
