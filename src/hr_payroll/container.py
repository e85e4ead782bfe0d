from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LATE_TOLERANCE_MINUTES, DEFAULT_TOKEN_HOURS, DEFAULT_WORK_START_TIME
from .dashboard.mysql_dashboard_repository import MySQLDashboardRepository
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.service import DepartmentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollService
from .positions.mysql_position_repository import MySQLPositionRepository
from .positions.service import PositionService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.service import RequestService
from .sales.mysql_sales_repository import MySQLSalesRepository
from .sales.service import SalesService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    employees_repo: MySQLEmployeeRepository
    departments_repo: MySQLDepartmentRepository
    positions_repo: MySQLPositionRepository
    attendance_repo: MySQLAttendanceRepository
    requests_repo: MySQLRequestRepository
    sales_repo: MySQLSalesRepository
    payroll_repo: MySQLPayrollRepository
    dashboard_repo: MySQLDashboardRepository

    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    department_service: DepartmentService
    position_service: PositionService
    attendance_service: AttendanceService
    request_service: RequestService
    sales_service: SalesService
    payroll_service: PayrollService
    dashboard_service: DashboardService


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_expires_hours: int = DEFAULT_TOKEN_HOURS,
    work_start_time: str = DEFAULT_WORK_START_TIME,
    late_tolerance_minutes: int = DEFAULT_LATE_TOLERANCE_MINUTES,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 5)),
    )
    conn = DatabaseConnection.get_instance(config)

    users_repo = MySQLUserRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)
    positions_repo = MySQLPositionRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    requests_repo = MySQLRequestRepository(conn)
    sales_repo = MySQLSalesRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)
    dashboard_repo = MySQLDashboardRepository(conn)

    tokens = TokenService(jwt_secret, expires_hours=int(jwt_expires_hours))

    return Container(
        conn=conn,
        users_repo=users_repo,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        positions_repo=positions_repo,
        attendance_repo=attendance_repo,
        requests_repo=requests_repo,
        sales_repo=sales_repo,
        payroll_repo=payroll_repo,
        dashboard_repo=dashboard_repo,
        auth_service=AuthService(users_repo, tokens),
        user_service=UserService(users_repo, employees_repo),
        employee_service=EmployeeService(employees_repo),
        department_service=DepartmentService(departments_repo),
        position_service=PositionService(positions_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            strategy_factory=AttendanceStrategyFactory.from_settings(work_start_time, late_tolerance_minutes),
        ),
        request_service=RequestService(requests_repo),
        sales_service=SalesService(sales_repo, employees_repo, positions_repo),
        payroll_service=PayrollService(payroll_repo),
        dashboard_service=DashboardService(dashboard_repo),
    )
