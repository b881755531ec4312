"""Operations exposed by the staff directory.

The service owns the employee store and the user directory it is built with;
routes receive it through a FastAPI dependency and never reach module state.
"""

import logging
from collections.abc import Mapping
from typing import Any

from staff_directory.auth import gate
from staff_directory.auth.gate import AuthContext, AuthPayload
from staff_directory.core import config
from staff_directory.models.employee import Employee
from staff_directory.models.user import AuthUser, Role
from staff_directory.query import EmployeeFilter, EmployeePage, EmployeeSort, query_employees
from staff_directory.store import EmployeeStore, UserDirectory, build_demo_users, seed_employees

logger = logging.getLogger(__name__)

EDITOR_ROLES = frozenset({Role.ADMIN})


class DirectoryService:
    def __init__(self, store: EmployeeStore, users: UserDirectory) -> None:
        self.store = store
        self.users = users

    def login(self, username: str, password: str) -> AuthPayload:
        return gate.login(self.users, username, password)

    def resolve_context(self, token: str | None) -> AuthContext:
        return gate.resolve_context(token)

    def me(self, context: AuthContext) -> AuthUser | None:
        return gate.current_user(context)

    def list_employees(
        self,
        employee_filter: EmployeeFilter | None = None,
        page: int = 1,
        page_size: int = config.DEFAULT_PAGE_SIZE,
        sort: EmployeeSort | None = None,
    ) -> EmployeePage:
        return query_employees(self.store.all(), employee_filter, sort, page, page_size)

    def get_employee(self, employee_id: str) -> Employee | None:
        return self.store.find_by_id(employee_id)

    def add_employee(self, data: Mapping[str, Any], context: AuthContext) -> Employee:
        user = gate.authorize(context, EDITOR_ROLES)
        employee = self.store.append(data)
        logger.info('User id=%s added employee %s', user.id, employee.id)
        return employee

    def update_employee(self, employee_id: str, data: Mapping[str, Any], context: AuthContext) -> Employee:
        user = gate.authorize(context, EDITOR_ROLES)
        employee = self.store.update(employee_id, data)
        logger.info('User id=%s updated employee %s', user.id, employee.id)
        return employee


def build_directory_service(seed: bool | None = None) -> DirectoryService:
    store = EmployeeStore()
    if config.SEED_DEMO_DATA if seed is None else seed:
        seed_employees(store)
    return DirectoryService(store, build_demo_users())
