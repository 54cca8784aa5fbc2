from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.resolver import IdentityResolver
from .employees.service import EmployeeDirectoryService, EmployeeUpsertService
from .identity.mysql_account_repository import MySQLAccountRepository
from .identity.provider import AccountIdentityProvider, IdentityProvider
from .identity.service import AuthService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .notifications.sender import NotificationSender
from .notifications.smtp_sender import SMTPConfig, SmtpNotificationSender
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.service import SalaryService


@dataclass(frozen=True)
class Container:
    identity: IdentityProvider
    notifier: NotificationSender

    resolver: IdentityResolver
    auth_service: AuthService
    upsert_service: EmployeeUpsertService
    directory_service: EmployeeDirectoryService
    attendance_service: AttendanceService
    leave_service: LeaveService
    salary_service: SalaryService


def build_container(*, settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.DB_CONFIG))

    smtp = settings.SMTP_CONFIG
    notifier = SmtpNotificationSender(
        SMTPConfig(
            host=str(smtp["host"]),
            port=int(smtp.get("port", 587)),
            username=smtp.get("username") or None,
            password=smtp.get("password") or None,
            use_tls=bool(smtp.get("use_tls", True)),
        ),
        mail_from=settings.MAIL_FROM,
    )

    accounts_repo = MySQLAccountRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    salaries_repo = MySQLSalaryRepository(conn)

    identity = AccountIdentityProvider(
        accounts_repo,
        notifier,
        secret_key=settings.SECRET_KEY,
        reset_url=settings.PASSWORD_RESET_URL,
        reset_max_age=int(settings.PASSWORD_RESET_MAX_AGE),
        max_failed_logins=int(settings.MAX_FAILED_LOGINS),
        lockout_minutes=int(settings.LOCKOUT_MINUTES),
    )
    resolver = IdentityResolver(employees_repo)

    return Container(
        identity=identity,
        notifier=notifier,
        resolver=resolver,
        auth_service=AuthService(identity, accounts_repo, resolver),
        upsert_service=EmployeeUpsertService(
            employees_repo,
            resolver,
            identity,
            notifier,
            login_url=settings.LOGIN_URL,
        ),
        directory_service=EmployeeDirectoryService(employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo, timezone=settings.APP_TIMEZONE or None),
        leave_service=LeaveService(leaves_repo, employees_repo),
        salary_service=SalaryService(salaries_repo, employees_repo),
    )
