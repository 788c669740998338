"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SESSION_COOKIE_NAME = "session"
DEFAULT_SESSION_DAYS = 5

FREE_EMPLOYEE_LIMIT = 5
DEFAULT_CURRENCY = "INR"

# Seat pricing, in rupees
SEAT_PRICE = 99
PLATFORM_FEE = 15
PROCESSING_FEE_RATE = 0.02

SUBSCRIPTION_TOTAL_COUNT = 999
BILLING_HISTORY_LIMIT = 50

DEFAULT_MONTHLY_SALARY = 50000
WITHHOLDING_RATE = 0.10

DEFAULT_EMPLOYEE_ROLE = "Staff"
DEFAULT_DEPARTMENT = "General"

PROFILE_UPDATE_FIELDS = ("bankName", "accountNumber", "routingNumber", "govIdNumber", "address")

HALF_DAY_LEAVE = "Half Day Leave"
# Half days come out of the casual allowance.
HALF_DAY_BALANCE_TYPE = "Casual Leave"
LEAVE_ALLOCATION_TYPES = {
    "sick": "Sick Leave",
    "annual": "Annual Leave",
    "casual": "Casual Leave",
    "other": "Other Leave",
}
