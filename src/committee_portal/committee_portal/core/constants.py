"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_MEMBERS_PER_TEAM = 5
DEFAULT_TEAM_COUNT = 8
TEAM_NAME_TEMPLATE = "Team {n}"

REPORT_PAGE_SIZE = 6

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6

DEFAULT_SESSION_CHECK_SECONDS = 10

MAINTENANCE_MODE_KEY = "maintenance_mode"
MAINTENANCE_MESSAGE_KEY = "maintenance_message"
DEFAULT_MAINTENANCE_MESSAGE = "We are currently performing scheduled maintenance. Please check back soon."
