"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MONTHLY_CAPACITY_HOURS = 160
DEFAULT_AUDIT_QUERY_LIMIT = 100
DEFAULT_DELIVERY_OFFSET_DAYS = 7
LUNCH_DEDUCTION_MINUTES = 60
MINUTES_PER_DAY = 24 * 60
UNTITLED_TASK = "(Sem título)"
