"""Filter, sort and paginate employee listings."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from staff_directory.core.errors import InvalidPagination
from staff_directory.models.employee import Employee


class SortField(str, Enum):
    NAME = 'NAME'
    AGE = 'AGE'
    ATTENDANCE = 'ATTENDANCE'
    CREATED_AT = 'CREATED_AT'


class SortOrder(str, Enum):
    ASC = 'ASC'
    DESC = 'DESC'


@dataclass(frozen=True)
class EmployeeFilter:
    name_contains: str | None = None
    class_name: str | None = None
    min_attendance: int | None = None

    def matches(self, employee: Employee) -> bool:
        # None means "no constraint"; empty strings and zero still apply.
        if self.name_contains is not None and self.name_contains.lower() not in employee.name.lower():
            return False
        if self.class_name is not None and employee.class_name != self.class_name:
            return False
        if self.min_attendance is not None and employee.attendance < self.min_attendance:
            return False
        return True


@dataclass(frozen=True)
class EmployeeSort:
    field: SortField
    order: SortOrder = SortOrder.ASC


@dataclass(frozen=True)
class EmployeePage:
    items: list[Employee]
    total_count: int
    page: int
    page_size: int


SORT_KEYS = {
    SortField.NAME: lambda employee: employee.name.lower(),
    SortField.AGE: lambda employee: employee.age,
    SortField.ATTENDANCE: lambda employee: employee.attendance,
    SortField.CREATED_AT: lambda employee: employee.created_at,
}


def filter_employees(employees: Iterable[Employee], employee_filter: EmployeeFilter | None) -> list[Employee]:
    if employee_filter is None:
        return list(employees)
    return [employee for employee in employees if employee_filter.matches(employee)]


def sort_employees(employees: list[Employee], sort: EmployeeSort | None) -> list[Employee]:
    if sort is None:
        return list(employees)
    # sorted(reverse=True) keeps equal keys in their original relative order.
    return sorted(employees, key=SORT_KEYS[sort.field], reverse=sort.order == SortOrder.DESC)


def paginate(employees: list[Employee], page: int, page_size: int) -> list[Employee]:
    if page < 1 or page_size < 1:
        raise InvalidPagination()
    start = (page - 1) * page_size
    return employees[start:start + page_size]


def query_employees(
    employees: Iterable[Employee],
    employee_filter: EmployeeFilter | None = None,
    sort: EmployeeSort | None = None,
    page: int = 1,
    page_size: int = 10,
) -> EmployeePage:
    matching = sort_employees(filter_employees(employees, employee_filter), sort)
    return EmployeePage(
        items=paginate(matching, page, page_size),
        total_count=len(matching),
        page=page,
        page_size=page_size,
    )
