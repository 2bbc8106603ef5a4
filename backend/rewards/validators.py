"""
Reward distribution percentage validation.

Pure functions — no database access, no side effects — so the same rule
can be exercised directly in unit tests and reused by any write path.

Rule
----
Each editable share (sales, director, creator) must be a whole number in
``[MIN_SHARE_PERCENTAGE, MAX_SHARE_PERCENTAGE]``.  Together with the fixed
operations cut they must add up to exactly 100::

    OPERATION_PERCENTAGE + sales + director + creator == 100

Range and type checks run first; the sum is only checked once every
share is individually acceptable.  A failing sum is reported against the
creator share, which the admin screen treats as the balancing field.

Error keys are the field names of the HTTP API (``salesPercentage`` ...)
so a client can attach each message to the input that produced it.
"""

from __future__ import annotations

from typing import Any

from core import constants
from core.domain.exceptions import DomainValidationError

SALES_FIELD = "salesPercentage"
DIRECTOR_FIELD = "directorPercentage"
CREATOR_FIELD = "creatorPercentage"

# The field that absorbs a sum mismatch.
BALANCING_FIELD = CREATOR_FIELD


def _is_whole_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def distribution_total(sales: int, director: int, creator: int) -> int:
    """Return the full percentage total including the operations cut."""
    return constants.OPERATION_PERCENTAGE + sales + director + creator


def validate_distribution(*, sales: Any, director: Any, creator: Any) -> int:
    """
    Validate a proposed split and return its total (always 100 on success).

    Raises:
        DomainValidationError: with ``errors`` keyed by API field name and,
            whenever all three values are whole numbers, ``extra={"total": n}``.
    """
    errors: dict[str, list[str]] = {}
    for field, value in ((SALES_FIELD, sales), (DIRECTOR_FIELD, director), (CREATOR_FIELD, creator)):
        if not _is_whole_number(value):
            errors[field] = ["Must be a whole number."]
        elif not constants.MIN_SHARE_PERCENTAGE <= value <= constants.MAX_SHARE_PERCENTAGE:
            errors[field] = [
                f"Must be between {constants.MIN_SHARE_PERCENTAGE} and "
                f"{constants.MAX_SHARE_PERCENTAGE}."
            ]
    if errors:
        extra = {}
        if all(_is_whole_number(v) for v in (sales, director, creator)):
            extra["total"] = distribution_total(sales, director, creator)
        raise DomainValidationError(
            "Reward percentages are out of range.",
            errors=errors,
            extra=extra,
        )

    total = distribution_total(sales, director, creator)
    if total != constants.TOTAL_PERCENTAGE:
        remaining = constants.TOTAL_PERCENTAGE - total
        raise DomainValidationError(
            f"Percentages must add up to {constants.TOTAL_PERCENTAGE}% "
            f"(currently {total}%).",
            errors={
                BALANCING_FIELD: [
                    f"Adjust by {remaining:+d} so the total, including the fixed "
                    f"{constants.OPERATION_PERCENTAGE}% operations cut, is "
                    f"{constants.TOTAL_PERCENTAGE}% (currently {total}%)."
                ],
            },
            extra={"total": total},
        )
    return total
