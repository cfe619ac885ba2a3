"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_SORT_BY = "id"
DEFAULT_SORT_DIRECTION = "asc"
DASHBOARD_RECENT_LIMIT = 5

# Public (camelCase) sort key -> employees column
SORTABLE_FIELDS = {
    "id": "id",
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "department": "department",
    "position": "position",
    "hireDate": "hire_date",
    "salary": "salary",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

# Suggested values for the web form; department stays free text.
DEPARTMENTS = (
    "HR",
    "Engineering",
    "Marketing",
    "Sales",
    "Finance",
    "Operations",
    "IT",
    "Legal",
    "Customer Service",
    "Research & Development",
)
