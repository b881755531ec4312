import pytest

from staff_directory.auth.gate import Anonymous, Authenticated, InvalidToken
from staff_directory.core import config
from staff_directory.core.errors import EmployeeNotFound, Forbidden, InvalidCredentials, Unauthenticated
from staff_directory.models.user import AuthUser, Role
from staff_directory.query import EmployeeFilter, EmployeeSort, SortField, SortOrder
from staff_directory.services.directory_service import DirectoryService, build_directory_service
from staff_directory.store import EmployeeStore, build_demo_users, seed_employees

ADMIN_CONTEXT = Authenticated(user=AuthUser(id='1', username='admin', role=Role.ADMIN))
EMPLOYEE_CONTEXT = Authenticated(user=AuthUser(id='2', username='john', role=Role.EMPLOYEE))

NEW_HIRE = {
    'name': 'Dan Park',
    'age': 41,
    'class_name': 'Class C',
    'subjects': ['Art'],
    'attendance': 77,
    'flagged': False,
}


@pytest.fixture(scope='module')
def users():
    return build_demo_users()


@pytest.fixture
def service(users) -> DirectoryService:
    store = EmployeeStore()
    seed_employees(store)
    return DirectoryService(store, users)


def test_login_then_resolve_round_trip(service: DirectoryService, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'JWT_SECRET_KEY', 'service-test-secret-long-enough-for-hs256')

    payload = service.login('admin', 'admin123')
    context = service.resolve_context(payload.token)

    assert payload.user == AuthUser(id='1', username='admin', role=Role.ADMIN)
    assert context == Authenticated(user=payload.user)
    assert service.me(context) == payload.user


def test_login_with_wrong_password_fails(service: DirectoryService) -> None:
    with pytest.raises(InvalidCredentials):
        service.login('admin', 'wrong')


def test_me_is_none_for_anonymous(service: DirectoryService) -> None:
    assert service.me(Anonymous()) is None


def test_list_employees_defaults(service: DirectoryService) -> None:
    page = service.list_employees()

    assert [employee.id for employee in page.items] == ['e1', 'e2', 'e3']
    assert page.total_count == 3
    assert (page.page, page.page_size) == (1, 10)


def test_list_employees_filter_and_sort(service: DirectoryService) -> None:
    page = service.list_employees(
        EmployeeFilter(class_name='Class A'),
        sort=EmployeeSort(field=SortField.ATTENDANCE, order=SortOrder.DESC),
    )

    assert [employee.name for employee in page.items] == ['Clara Lee', 'Alice Johnson']
    assert page.total_count == 2


def test_get_employee_returns_none_when_missing(service: DirectoryService) -> None:
    assert service.get_employee('e2').name == 'Bob Singh'
    assert service.get_employee('e404') is None


def test_admin_can_add_employee(service: DirectoryService) -> None:
    employee = service.add_employee(NEW_HIRE, ADMIN_CONTEXT)

    assert employee.id == 'e4'
    assert service.list_employees().total_count == 4


@pytest.mark.parametrize('context', [Anonymous(), InvalidToken(reason='Invalid token')])
def test_add_employee_requires_authentication(service: DirectoryService, context) -> None:
    with pytest.raises(Unauthenticated):
        service.add_employee(NEW_HIRE, context)

    assert service.list_employees().total_count == 3


def test_add_employee_forbidden_for_employee_role(service: DirectoryService) -> None:
    with pytest.raises(Forbidden):
        service.add_employee(NEW_HIRE, EMPLOYEE_CONTEXT)

    assert service.list_employees().total_count == 3


def test_admin_can_update_employee(service: DirectoryService) -> None:
    employee = service.update_employee('e3', {'flagged': True}, ADMIN_CONTEXT)

    assert employee.flagged is True
    assert service.get_employee('e3').flagged is True


def test_update_employee_requires_authentication(service: DirectoryService) -> None:
    with pytest.raises(Unauthenticated):
        service.update_employee('e1', {'name': 'Changed'}, Anonymous())

    assert service.get_employee('e1').name == 'Alice Johnson'


def test_update_employee_forbidden_for_employee_role(service: DirectoryService) -> None:
    with pytest.raises(Forbidden):
        service.update_employee('e1', {'name': 'Changed'}, EMPLOYEE_CONTEXT)

    assert service.get_employee('e1').name == 'Alice Johnson'


def test_update_missing_employee_is_not_found(service: DirectoryService) -> None:
    before = service.store.all()

    with pytest.raises(EmployeeNotFound):
        service.update_employee('e404', {'name': 'Ghost'}, ADMIN_CONTEXT)

    assert service.store.all() == before


def test_authorization_is_checked_before_lookup(service: DirectoryService) -> None:
    with pytest.raises(Forbidden):
        service.update_employee('e404', {'name': 'Ghost'}, EMPLOYEE_CONTEXT)


def test_build_directory_service_can_skip_seed() -> None:
    assert service_size(build_directory_service(seed=False)) == 0
    assert service_size(build_directory_service(seed=True)) == 3


def service_size(service: DirectoryService) -> int:
    return len(service.store)
