from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .announcements.firestore_repository import FirestoreAnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.firestore_repository import FirestoreAttendanceRepository
from .attendance.service import AttendanceService
from .auth.firestore_user_repository import FirestoreCompanyDataRepository, FirestoreUserRepository
from .auth.identity import FirebaseIdentityProvider, IdentityProvider
from .auth.service import AuthService
from .billing.firestore_repository import (
    FirestorePaymentLogRepository,
    FirestoreSeatOrderClaimRepository,
    FirestoreWebhookEventRepository,
)
from .billing.gateway import PaymentGateway, RazorpayGateway
from .billing.service import BillingService
from .chat.firestore_repository import FirestoreChatRepository
from .chat.service import ChatService
from .companies.firestore_repository import FirestoreCompanyRepository
from .companies.service import CompanyService
from .core.constants import DEFAULT_SESSION_DAYS
from .database.connection import FirebaseConfig, FirebaseConnection
from .documents.firestore_repository import FirestoreDocumentRepository, FirestoreDocumentTemplateRepository
from .documents.service import DocumentService
from .employees.firestore_repository import FirestoreEmployeeRepository
from .employees.service import EmployeeService
from .hierarchy.firestore_repository import FirestoreHierarchyRepository
from .hierarchy.service import HierarchyService
from .leaves.firestore_repository import FirestoreLeaveBalanceRepository, FirestoreLeaveRepository
from .leaves.service import LeaveService
from .notifications.firestore_repository import FirestoreNotificationRepository
from .notifications.service import NotificationService
from .payroll.firestore_repository import FirestorePayrollRepository, FirestorePayslipRequestRepository
from .payroll.service import PayrollService
from .performance.service import PerformanceService
from .profile_updates.firestore_repository import FirestoreProfileUpdateRepository
from .profile_updates.service import ProfileUpdateService
from .recruitment.firestore_repository import FirestoreJobRepository
from .recruitment.service import RecruitmentService
from .tasks.firestore_repository import FirestoreTaskRepository
from .tasks.service import TaskService
from .teams.firestore_repository import FirestoreTeamRepository
from .teams.service import TeamService


@dataclass(frozen=True)
class Container:
    conn: Optional[FirebaseConnection]

    users_repo: Any
    companies_repo: Any
    employees_repo: Any
    identity: IdentityProvider
    gateway: PaymentGateway

    auth_service: AuthService
    company_service: CompanyService
    employee_service: EmployeeService
    notification_service: NotificationService
    announcement_service: AnnouncementService
    leave_service: LeaveService
    payroll_service: PayrollService
    billing_service: BillingService
    team_service: TeamService
    chat_service: ChatService
    recruitment_service: RecruitmentService
    profile_update_service: ProfileUpdateService
    attendance_service: AttendanceService
    task_service: TaskService
    document_service: DocumentService
    hierarchy_service: HierarchyService
    performance_service: PerformanceService


def wire_container(
    *,
    users,
    companies,
    company_data,
    employees,
    notifications,
    announcements,
    leaves,
    leave_balances,
    payroll,
    payslips,
    payment_logs,
    webhook_events,
    seat_claims,
    teams,
    chat,
    jobs,
    profile_updates,
    attendance,
    tasks,
    documents,
    doc_templates,
    hierarchy,
    identity: IdentityProvider,
    gateway: PaymentGateway,
    plan_id: str = "",
    session_days: int = DEFAULT_SESSION_DAYS,
    conn: Optional[FirebaseConnection] = None,
) -> Container:
    """Assemble services from repositories; tests pass in-memory fakes here."""
    company_service = CompanyService(companies, users)
    notification_service = NotificationService(notifications)

    return Container(
        conn=conn,
        users_repo=users,
        companies_repo=companies,
        employees_repo=employees,
        identity=identity,
        gateway=gateway,
        auth_service=AuthService(
            users,
            identity,
            employees=employees,
            companies=companies,
            company_data=company_data,
            session_days=session_days,
        ),
        company_service=company_service,
        employee_service=EmployeeService(employees, users, identity, company_service),
        notification_service=notification_service,
        announcement_service=AnnouncementService(announcements),
        leave_service=LeaveService(leaves, leave_balances, employees, notification_service),
        payroll_service=PayrollService(payroll, payslips, employees, notification_service),
        billing_service=BillingService(
            companies,
            company_service,
            payment_logs,
            webhook_events,
            seat_claims,
            gateway,
            plan_id=plan_id,
        ),
        team_service=TeamService(teams),
        chat_service=ChatService(chat, users),
        recruitment_service=RecruitmentService(jobs),
        profile_update_service=ProfileUpdateService(profile_updates, employees, notification_service),
        attendance_service=AttendanceService(attendance),
        task_service=TaskService(tasks, employees, notification_service),
        document_service=DocumentService(documents, employees, notification_service, doc_templates),
        hierarchy_service=HierarchyService(hierarchy, employees),
        performance_service=PerformanceService(employees, tasks, attendance),
    )


def build_container(*, firebase_config: dict, razorpay_config: dict) -> Container:
    config = FirebaseConfig(
        project_id=str(firebase_config.get("project_id") or ""),
        client_email=str(firebase_config.get("client_email") or ""),
        private_key=str(firebase_config.get("private_key") or ""),
    )
    conn = FirebaseConnection.get_instance(config)

    gateway = RazorpayGateway(
        key_id=str(razorpay_config.get("key_id") or ""),
        key_secret=str(razorpay_config.get("key_secret") or ""),
        webhook_secret=str(razorpay_config.get("webhook_secret") or ""),
    )

    return wire_container(
        users=FirestoreUserRepository(conn),
        companies=FirestoreCompanyRepository(conn),
        company_data=FirestoreCompanyDataRepository(conn),
        employees=FirestoreEmployeeRepository(conn),
        notifications=FirestoreNotificationRepository(conn),
        announcements=FirestoreAnnouncementRepository(conn),
        leaves=FirestoreLeaveRepository(conn),
        leave_balances=FirestoreLeaveBalanceRepository(conn),
        payroll=FirestorePayrollRepository(conn),
        payslips=FirestorePayslipRequestRepository(conn),
        payment_logs=FirestorePaymentLogRepository(conn),
        webhook_events=FirestoreWebhookEventRepository(conn),
        seat_claims=FirestoreSeatOrderClaimRepository(conn),
        teams=FirestoreTeamRepository(conn),
        chat=FirestoreChatRepository(conn),
        jobs=FirestoreJobRepository(conn),
        profile_updates=FirestoreProfileUpdateRepository(conn),
        attendance=FirestoreAttendanceRepository(conn),
        tasks=FirestoreTaskRepository(conn),
        documents=FirestoreDocumentRepository(conn),
        doc_templates=FirestoreDocumentTemplateRepository(conn),
        hierarchy=FirestoreHierarchyRepository(conn),
        identity=FirebaseIdentityProvider(conn),
        gateway=gateway,
        plan_id=str(razorpay_config.get("plan_id") or ""),
        conn=conn,
    )
