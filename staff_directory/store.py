"""In-memory storage for employee records and user accounts.

Nothing here is persisted: a fresh process starts from the demo seed (or an
empty directory when seeding is disabled).
"""

import itertools
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from threading import Lock
from typing import Any

from staff_directory.auth.passwords import hash_password
from staff_directory.core.errors import EmployeeNotFound
from staff_directory.models.employee import EDITABLE_FIELDS, Employee
from staff_directory.models.user import Role, User

logger = logging.getLogger(__name__)

DEMO_EMPLOYEES = [
    {
        'name': 'Alice Johnson',
        'age': 29,
        'class_name': 'Class A',
        'subjects': ['Math', 'Science'],
        'attendance': 96,
        'flagged': False,
        'created_at': '2024-01-12T00:00:00.000Z',
    },
    {
        'name': 'Bob Singh',
        'age': 34,
        'class_name': 'Class B',
        'subjects': ['English', 'History'],
        'attendance': 89,
        'flagged': True,
        'created_at': '2024-03-01T00:00:00.000Z',
    },
    {
        'name': 'Clara Lee',
        'age': 26,
        'class_name': 'Class A',
        'subjects': ['Biology', 'Chemistry'],
        'attendance': 92,
        'flagged': False,
        'created_at': '2024-05-21T00:00:00.000Z',
    },
]

DEMO_USERS = [
    ('1', 'admin', 'admin123', Role.ADMIN),
    ('2', 'john', 'john123', Role.EMPLOYEE),
]


def utc_timestamp(moment: datetime | None = None) -> str:
    """Render a UTC ISO-8601 timestamp with fixed-width fields, e.g. 2024-01-12T00:00:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class EmployeeStore:
    """Ordered, process-local collection of employees.

    Every public method takes the lock and hands out copies, so callers can
    never mutate stored records behind the store's back.
    """

    def __init__(self) -> None:
        self._employees: list[Employee] = []
        self._ids = itertools.count(1)
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._employees)

    def append(self, fields: Mapping[str, Any], created_at: str | None = None) -> Employee:
        data = {key: value for key, value in fields.items() if key in EDITABLE_FIELDS}
        if data.get('flagged') is None:
            data['flagged'] = False
        data['subjects'] = list(data.get('subjects') or [])

        with self._lock:
            employee = Employee(
                id=f'e{next(self._ids)}',
                created_at=created_at or utc_timestamp(),
                **data,
            )
            self._employees.append(employee)
            logger.info('Added employee %s (%s)', employee.id, employee.name)
            return employee.copy()

    def update(self, employee_id: str, fields: Mapping[str, Any]) -> Employee:
        changes = {key: value for key, value in fields.items() if key in EDITABLE_FIELDS}
        if 'subjects' in changes:
            changes['subjects'] = list(changes['subjects'] or [])

        with self._lock:
            employee = self._find(employee_id)
            if employee is None:
                raise EmployeeNotFound(employee_id)

            for key, value in changes.items():
                setattr(employee, key, value)

            logger.info('Updated employee %s fields=%s', employee_id, sorted(changes))
            return employee.copy()

    def find_by_id(self, employee_id: str) -> Employee | None:
        with self._lock:
            employee = self._find(employee_id)
            return employee.copy() if employee else None

    def all(self) -> tuple[Employee, ...]:
        with self._lock:
            return tuple(employee.copy() for employee in self._employees)

    def _find(self, employee_id: str) -> Employee | None:
        for employee in self._employees:
            if employee.id == employee_id:
                return employee
        return None


class UserDirectory:
    """Static set of accounts allowed to log in."""

    def __init__(self, users: Iterable[User] = ()) -> None:
        self._users = {user.username: user for user in users}

    def find_by_username(self, username: str) -> User | None:
        return self._users.get(username)


def seed_employees(store: EmployeeStore) -> None:
    for record in DEMO_EMPLOYEES:
        fields = {key: value for key, value in record.items() if key != 'created_at'}
        store.append(fields, created_at=record['created_at'])
    logger.info('Seeded %d demo employees', len(DEMO_EMPLOYEES))


def build_demo_users() -> UserDirectory:
    return UserDirectory(
        User(id=user_id, username=username, password_hash=hash_password(password), role=role)
        for user_id, username, password, role in DEMO_USERS
    )
