"""
Contextual appropriateness of a permission for an app category.

Maps permission families to the categories for which requesting them is
expected. Only modulates point weight; nothing is ever blocked.
"""

from typing import FrozenSet, Optional, Sequence, Tuple

from apprisk_core.heuristics.base import BaseEvaluator
from apprisk_core.logic.models import AppCategory


# Checked in order; the first family found in the identifier decides
DEFAULT_APPROPRIATENESS_TABLE: Tuple[Tuple[str, FrozenSet[str]], ...] = (
    ("CAMERA", frozenset({AppCategory.CAMERA, AppCategory.SOCIAL, AppCategory.COMMUNICATION, AppCategory.MESSAGING})),
    ("RECORD_AUDIO", frozenset({AppCategory.CAMERA, AppCategory.COMMUNICATION, AppCategory.SOCIAL})),
    ("LOCATION", frozenset({AppCategory.LOCATION, AppCategory.SOCIAL, AppCategory.COMMUNICATION})),
    ("CONTACTS", frozenset({AppCategory.MESSAGING, AppCategory.SOCIAL, AppCategory.COMMUNICATION})),
    ("SMS", frozenset({AppCategory.MESSAGING})),
    ("CALL_LOG", frozenset({AppCategory.COMMUNICATION})),
)


class ContextualAppropriatenessEvaluator(BaseEvaluator):
    """Decides whether a permission is expected for an inferred app category."""

    def __init__(self, table: Optional[Sequence[Tuple[str, FrozenSet[str]]]] = None):
        super().__init__()
        self.table = tuple(DEFAULT_APPROPRIATENESS_TABLE if table is None else table)

    @property
    def name(self) -> str:
        return "contextual_appropriateness"

    @property
    def category(self) -> str:
        return "Permission"

    def is_appropriate(self, permission_id: str, category: str) -> bool:
        """
        Check a permission against the category it was requested by.

        Args:
            permission_id: Full permission identifier
            category: Category from CategoryClassifier

        Returns:
            False only when the permission belongs to a listed family and the
            category is not one the family is expected for
        """
        for family, expected_categories in self.table:
            if family in permission_id:
                return category in expected_categories
        return True
