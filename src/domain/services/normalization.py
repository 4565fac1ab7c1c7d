"""Domain normalization helpers."""

from src.domain.constants import DEFAULT_EXPENSE_CATEGORY


def normalize_category(category: str | None) -> str:
    """Normalize expense category labels.

    Args:
        category: Raw category label.

    Returns:
        str: Trimmed label, or the default category when blank.
    """
    if not category:
        return DEFAULT_EXPENSE_CATEGORY
    cleaned = category.strip()
    return cleaned if cleaned else DEFAULT_EXPENSE_CATEGORY


def normalize_description(description: str | None) -> str:
    """Normalize free-form descriptions.

    Args:
        description: Raw description.

    Returns:
        str: Description with surrounding and repeated whitespace removed.
    """
    if not description:
        return ""
    return " ".join(description.split())


__all__ = ["normalize_category", "normalize_description"]
