"""
Chemical lookup service.
Holds the configured Gemini client and the classification tables.
"""
from typing import List, Mapping, Optional, Sequence

from core.logger import setup_logger
from core.rules import CATEGORY_LABELS, H_TO_CATEGORY_RULES
from core.schema import CategoryDescription, ChemicalInfo, HazardRule, StorageCategory
from llm.client import get_client
from llm.lookup import fetch_chemical_info

logger = setup_logger(__name__)


class ChemicalService:
    """Service for looking up and classifying chemicals by CAS number."""

    def __init__(
        self,
        client=None,
        rules: Optional[Sequence[HazardRule]] = None,
        labels: Optional[Mapping[StorageCategory, str]] = None,
    ):
        """
        Initialize chemical service.

        Args:
            client: Gemini client, defaults to the process-wide singleton on first lookup
            rules: Ordered rule table, defaults to H_TO_CATEGORY_RULES
            labels: Category label table, defaults to CATEGORY_LABELS
        """
        self._client = client
        self.rules = list(rules) if rules is not None else H_TO_CATEGORY_RULES
        self.labels = dict(labels) if labels is not None else CATEGORY_LABELS

        missing = [c.value for c in StorageCategory if not self.labels.get(c)]
        if missing:
            logger.warning(f"Storage categories without labels: {missing}")

    @property
    def client(self):
        """Gemini client, created on first use."""
        if self._client is None:
            self._client = get_client()
        return self._client

    async def lookup(self, cas: str) -> ChemicalInfo:
        """
        Look up one CAS number.

        Args:
            cas: CAS registry number as entered by the user

        Returns:
            ChemicalInfo with derived storage category
        """
        return await fetch_chemical_info(
            cas,
            self.client,
            rules=self.rules,
            labels=self.labels,
        )

    def list_categories(self) -> List[CategoryDescription]:
        """List every storage category with its label, in declaration order."""
        return [
            CategoryDescription(category=category, label=self.labels.get(category, category.value))
            for category in StorageCategory
        ]
