"""
Core constants — **Single Source of Truth** for project-wide magic numbers.

Any formula or business rule that references a numeric constant should
import it from here instead of hardcoding.  This avoids drift between
apps that use the same value.
"""

# ── Reward Distribution ─────────────────────────────────────────────
# Every project reward is split four ways:
#     operations + sales + director + creator == 100 (%)
#
# The operations cut is reserved for the studio itself and is never
# user-editable.  The remaining three shares must therefore sum to
# DISTRIBUTABLE_PERCENTAGE.
OPERATION_PERCENTAGE: int = 10
TOTAL_PERCENTAGE: int = 100
DISTRIBUTABLE_PERCENTAGE: int = TOTAL_PERCENTAGE - OPERATION_PERCENTAGE

# Bounds applied to each editable share independently.
MIN_SHARE_PERCENTAGE: int = 0
MAX_SHARE_PERCENTAGE: int = DISTRIBUTABLE_PERCENTAGE

# Split reported for a project that has no stored distribution yet.
# Informational only — nothing is persisted until an admin saves one.
DEFAULT_SALES_PERCENTAGE: int = 15
DEFAULT_DIRECTOR_PERCENTAGE: int = 25
DEFAULT_CREATOR_PERCENTAGE: int = 50
