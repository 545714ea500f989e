"""
Storage category classification from GHS H-statements.
Pure functions over an injected rule table and label table.
"""
from typing import Iterable, Mapping, Optional, Sequence, Set

from core.schema import HazardRule, StorageCategory, normalize_h_code

# Checked only when no rule fired and the chemical is flammable
FLAMMABLE_LIQUID_CODES = frozenset({"H224", "H225", "H226"})


def normalize_h_statements(h_statements: Iterable[str]) -> Set[str]:
    """
    Normalize H-statements into a set of uppercased, trimmed codes.

    Args:
        h_statements: Raw H-statement strings from the model

    Returns:
        Set of normalized codes (duplicates and case variants collapse)
    """
    return {normalize_h_code(s) for s in h_statements}


def rule_matches(rule: HazardRule, h_set: Set[str], is_flammable: bool) -> bool:
    """Check whether a single rule fires for the normalized codes."""
    if rule.h_codes.isdisjoint(h_set):
        return False
    if rule.flammable is None:
        return True
    return rule.flammable is is_flammable


def classify_storage_category(
    h_statements: Iterable[str],
    is_flammable: bool,
    rules: Sequence[HazardRule],
) -> StorageCategory:
    """
    Determine the storage category for a chemical.

    Rules are scanned in order and the first firing rule wins. If none
    fires and the chemical is flammable, any of H224/H225/H226 still
    puts it into CAT_3.

    Args:
        h_statements: H-statements as returned by the model
        is_flammable: Flammability flag as returned by the model
        rules: Ordered rule table

    Returns:
        Exactly one StorageCategory, UNKNOWN when nothing applies
    """
    h_set = normalize_h_statements(h_statements)

    for rule in rules:
        if rule_matches(rule, h_set, is_flammable):
            return rule.category

    if is_flammable is True and not FLAMMABLE_LIQUID_CODES.isdisjoint(h_set):
        return StorageCategory.CAT_3

    return StorageCategory.UNKNOWN


def get_category_label(
    category: StorageCategory,
    labels: Mapping[StorageCategory, str],
) -> Optional[str]:
    """Look up the display label for a category."""
    return labels.get(category)
