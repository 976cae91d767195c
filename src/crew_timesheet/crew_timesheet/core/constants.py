"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAYS_PER_WEEK = 7
WEDNESDAY = 2
DEFAULT_WEEK_ANCHOR = WEDNESDAY

DEFAULT_SESSION_DAYS = 7
SESSION_PROFILE_KEY = "uspAdmin_user"
SELECTED_CONTRACT_KEY = "selected_contract_id"

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"

DEFAULT_MEMBER_HOURLY_RATE = 30.0
DASHBOARD_WINDOW_DAYS = 7
RECENT_ACTIVITY_LIMIT = 8
EXCEPTION_ALERT_LIMIT = 6
CREW_STATUS_ACTIVE_LIMIT = 5
CREW_STATUS_INACTIVE_LIMIT = 3
UNKNOWN_CREW_NAME = "Unknown Crew"
