"""
Prompt builder for CAS number lookups.
"""


def build_lookup_prompt(cas: str) -> str:
    """
    Build the lookup prompt for a single CAS number.

    The CAS number is passed through as given; the model is asked to
    report invalid numbers through the `error` field.

    Args:
        cas: CAS registry number (not validated)

    Returns:
        Prompt string
    """
    return (
        f"Lookup chemical information for CAS number: {cas}. "
        "Provide the official name in Chinese, the common GHS H-statements "
        "(hazard statements like H225, H301, etc.), and whether it is considered "
        "flammable (可燃) in a storage context. "
        "If the CAS is invalid, return an error: put a short explanation into "
        "the `error` field and leave the other fields empty."
    )
