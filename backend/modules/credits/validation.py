"""Credit availability checks."""

from .models import Credits, CreditType


def has_sufficient_credits(credits: Credits, credit_type: CreditType) -> bool:
    """True if at least one credit of ``credit_type`` is available."""
    return credits.get(credit_type) > 0


def can_start_consultation(credits: Credits, credit_type: CreditType) -> bool:
    """Whether a consultation of ``credit_type`` may begin."""
    return has_sufficient_credits(credits, credit_type)


def has_any_credits(credits: Credits) -> bool:
    return credits.chat > 0 or credits.audio > 0 or credits.video > 0


def needs_purchase(credits: Credits) -> bool:
    """
    Whether the "no credits" indicator should be shown.

    Only when every counter is zero.
    """
    return not has_any_credits(credits)
