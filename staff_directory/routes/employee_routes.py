from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from staff_directory.auth.dependencies import get_auth_context, get_directory_service, to_http_exception
from staff_directory.auth.gate import AuthContext
from staff_directory.core import config
from staff_directory.core.errors import DirectoryError
from staff_directory.query import EmployeeFilter, EmployeeSort, SortField, SortOrder
from staff_directory.services.directory_service import DirectoryService

router = APIRouter(tags=['employees'], dependencies=[Depends(get_auth_context)])

CAMEL_CASE = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class EmployeeInput(BaseModel):
    model_config = CAMEL_CASE

    name: str
    age: int = Field(ge=0)
    class_name: str
    subjects: list[str]
    attendance: int
    flagged: bool = False

    @field_validator('name', 'class_name')
    @classmethod
    def validate_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Value must not be blank.')
        return normalized


class EmployeeUpdate(BaseModel):
    model_config = CAMEL_CASE

    name: str | None = None
    age: int | None = Field(default=None, ge=0)
    class_name: str | None = None
    subjects: list[str] | None = None
    attendance: int | None = None
    flagged: bool | None = None

    @field_validator('*')
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError('Field may be omitted but not set to null.')
        return value

    @field_validator('name', 'class_name')
    @classmethod
    def validate_text(cls, value: str | None) -> str | None:
        if value is None:
            return value
        normalized = value.strip()
        if not normalized:
            raise ValueError('Value must not be blank.')
        return normalized


class EmployeeResponse(BaseModel):
    model_config = CAMEL_CASE

    id: str
    name: str
    age: int
    class_name: str
    subjects: list[str]
    attendance: int
    flagged: bool
    created_at: str


class EmployeePageResponse(BaseModel):
    model_config = CAMEL_CASE

    items: list[EmployeeResponse]
    total_count: int
    page: int
    page_size: int


def build_filter(
    name_contains: str | None,
    class_name: str | None,
    min_attendance: int | None,
) -> EmployeeFilter | None:
    if name_contains is None and class_name is None and min_attendance is None:
        return None
    return EmployeeFilter(name_contains=name_contains, class_name=class_name, min_attendance=min_attendance)


@router.get('', response_model=EmployeePageResponse)
def list_employees(
    name_contains: str | None = Query(default=None, alias='nameContains'),
    class_name: str | None = Query(default=None, alias='className'),
    min_attendance: int | None = Query(default=None, alias='minAttendance'),
    sort_field: SortField | None = Query(default=None, alias='sortField'),
    sort_order: SortOrder = Query(default=SortOrder.ASC, alias='sortOrder'),
    page: int = Query(default=1),
    page_size: int = Query(default=config.DEFAULT_PAGE_SIZE, alias='pageSize', le=config.MAX_PAGE_SIZE),
    service: DirectoryService = Depends(get_directory_service),
):
    employee_filter = build_filter(name_contains, class_name, min_attendance)
    sort = EmployeeSort(field=sort_field, order=sort_order) if sort_field else None

    try:
        return service.list_employees(employee_filter, page=page, page_size=page_size, sort=sort)
    except DirectoryError as exc:
        raise to_http_exception(exc) from exc


@router.get('/{employee_id}', response_model=EmployeeResponse | None)
def get_employee(employee_id: str, service: DirectoryService = Depends(get_directory_service)):
    return service.get_employee(employee_id)


@router.post('', response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def add_employee(
    data: EmployeeInput,
    context: AuthContext = Depends(get_auth_context),
    service: DirectoryService = Depends(get_directory_service),
):
    try:
        return service.add_employee(data.model_dump(), context)
    except DirectoryError as exc:
        raise to_http_exception(exc) from exc


@router.patch('/{employee_id}', response_model=EmployeeResponse)
@router.put('/{employee_id}', response_model=EmployeeResponse)
def update_employee(
    employee_id: str,
    data: EmployeeUpdate,
    context: AuthContext = Depends(get_auth_context),
    service: DirectoryService = Depends(get_directory_service),
):
    try:
        return service.update_employee(employee_id, data.model_dump(exclude_unset=True), context)
    except DirectoryError as exc:
        raise to_http_exception(exc) from exc
