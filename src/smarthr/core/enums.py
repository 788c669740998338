from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    EMPLOYER = "employer"
    EMPLOYEE = "employee"


class UserStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"


class EmployeeStatus(str, Enum):
    """Display status on the employee directory."""

    INVITED = "Invited"
    ACTIVE = "Active"


class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"


class RequestStatus(str, Enum):
    """Approval flow status for profile-update requests."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PayslipRequestStatus(str, Enum):
    PENDING = "Pending"
    FULFILLED = "Fulfilled"


class SubscriptionPlan(str, Enum):
    FREE = "free"
    PAID = "paid"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    HALTED = "halted"
    CANCELLED = "cancelled"


class AnnouncementType(str, Enum):
    NEWS = "News"
    UPDATE = "Update"
    EVENT = "Event"
    URGENT = "Urgent"


class TeamType(str, Enum):
    PERMANENT = "Permanent"
    PROJECT_BASED = "Project-Based"


class TeamHierarchy(str, Enum):
    FLAT = "Flat"
    HIERARCHICAL = "Hierarchical"
    MATRIX = "Matrix"


class JobType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"


class JobStatus(str, Enum):
    OPEN = "Open"
    CLOSED = "Closed"


class PunchType(str, Enum):
    CLOCK_IN = "Clock In"
    CLOCK_OUT = "Clock Out"


class TaskStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class DocumentStatus(str, Enum):
    PENDING = "Pending"
    UPLOADED = "Uploaded"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PayrollStatus(str, Enum):
    PAID = "Paid"


class HierarchyLevel(str, Enum):
    """Org chart levels, most senior first."""

    EXECUTIVE = "Executive"
    MANAGER = "Manager"
    TEAM_LEAD = "Team Lead"
    STAFF = "Staff"
