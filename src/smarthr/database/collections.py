"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations; collections appear on first write.
"""

USERS = "users"
EMPLOYEES = "employees"
COMPANIES = "companies"
ANNOUNCEMENTS = "announcements"
LEAVES = "leaves"
LEAVE_BALANCES = "leave_balances"
PAYROLL = "payroll"
PAYSLIP_REQUESTS = "payslip_requests"
ATTENDANCE = "attendance"
NOTIFICATIONS = "notifications"
CHAT_MESSAGES = "chat_messages"
TASKS = "tasks"
TEAMS = "teams"
DOCUMENTS = "documents"
PROFILE_UPDATES = "profile_updates"
JOBS = "jobs"
DOC_TEMPLATES = "docTemplates"
HIERARCHY = "hierarchy"
PAYMENT_LOGS = "paymentLogs"
WEBHOOK_EVENTS = "webhookEvents"
SEAT_ORDER_CLAIMS = "seatOrderClaims"

# Every collection whose records carry a ``companyName`` field, in deletion order.
COMPANY_SCOPED = (
    USERS,
    EMPLOYEES,
    ANNOUNCEMENTS,
    LEAVES,
    PAYROLL,
    ATTENDANCE,
    NOTIFICATIONS,
    CHAT_MESSAGES,
    LEAVE_BALANCES,
    TASKS,
    TEAMS,
    PAYSLIP_REQUESTS,
    DOCUMENTS,
    PROFILE_UPDATES,
    JOBS,
    DOC_TEMPLATES,
    HIERARCHY,
)
