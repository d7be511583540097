"""
Credits module.

Tracks chat/audio/video session credits and gates consultations on them.

Public API:
- ICreditsService: Interface for credit operations
- Credits, CreditType: Balance models
- has_sufficient_credits, can_start_consultation, has_any_credits,
  needs_purchase: Availability checks
- Credits exceptions: InvalidCreditAmountError
"""

from .interfaces import ICreditsService, ICreditsSubscription
from .models import Credits, CreditType, GrantCreditsRequest, CreditsResponse
from .validation import (
    has_sufficient_credits,
    can_start_consultation,
    has_any_credits,
    needs_purchase,
)
from .exceptions import CreditsError, InvalidCreditAmountError

__all__ = [
    # Interface
    "ICreditsService",
    "ICreditsSubscription",
    # Models
    "Credits",
    "CreditType",
    "GrantCreditsRequest",
    "CreditsResponse",
    # Checks
    "has_sufficient_credits",
    "can_start_consultation",
    "has_any_credits",
    "needs_purchase",
    # Exceptions
    "CreditsError",
    "InvalidCreditAmountError",
]
