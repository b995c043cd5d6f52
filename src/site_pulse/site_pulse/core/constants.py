"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

import re

EMPLOYEE_CODE_PATTERN = re.compile(r"^E\d{1,5}$")

# Role substrings (matched case-insensitively) that grant full visibility.
FULL_ACCESS_ROLE_KEYWORDS = ("manager", "team leader", "group leader", "admin")

DEFAULT_FETCH_WORKERS = 3
DEFAULT_AVAILABLE_DATES_WINDOW_DAYS = 30
DEFAULT_AVAILABLE_DATES_LIMIT = 30
DEFAULT_RECENT_ACTIVITY_LIMIT = 10
DEFAULT_ACTIVITY_PAGE_SIZE = 20
MAX_ACTIVITY_PAGE_SIZE = 100

# leave_type -> requires manager approval
LEAVE_TYPES = {
    "casual": False,
    "sick": False,
    "optional": False,
    "earned": True,
    "maternity": True,
    "paternity": True,
    "compensatory": True,
    "unpaid": True,
}
