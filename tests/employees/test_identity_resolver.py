import pytest

from src.employee_management.employee_management.core.exceptions import DataIntegrityError, NotFoundError
from src.employee_management.employee_management.employees.resolver import IdentityResolver
from src.employee_management.employee_management.employees.service import EmployeeDirectoryService


def test_unknown_email_resolves_to_guest(employees):
    identity = IdentityResolver(employees).resolve("nobody@x.com")

    assert identity.is_guest
    assert identity.employee is None
    assert identity.display_name == "Guest User"


def test_single_match_resolves_to_full_name(employees):
    employees.add("e1", "a@x.com", first_name="Asha", middle_name=None, last_name="Rao")

    identity = IdentityResolver(employees).resolve("a@x.com")

    assert not identity.is_guest
    assert identity.employee.employee_id == "e1"
    assert identity.display_name == "Asha Rao"


def test_record_without_name_falls_back_to_email(employees):
    employees.add("e1", "a@x.com")

    assert IdentityResolver(employees).resolve("a@x.com").display_name == "a@x.com"


def test_duplicate_emails_are_a_data_integrity_error(employees):
    employees.add("e1", "a@x.com", first_name="A")
    employees.add("e2", "a@x.com", first_name="B")

    with pytest.raises(DataIntegrityError):
        IdentityResolver(employees).resolve("a@x.com")


def test_lookup_is_exact_match(employees):
    employees.add("e1", "a@x.com", first_name="A")

    assert IdentityResolver(employees).find("A@X.COM") is None


def test_dashboard_counts_by_employment_type(employees):
    employees.add("e1", "a@x.com", employment_type="FTE")
    employees.add("e2", "b@x.com", employment_type="FTE")
    employees.add("e3", "c@x.com", employment_type="Intern")
    employees.add("e4", "d@x.com")

    counts = EmployeeDirectoryService(employees).dashboard_counts()

    assert counts == {"total": 4, "full_time": 2, "interns": 1}


def test_get_missing_employee_raises_not_found(employees):
    with pytest.raises(NotFoundError):
        EmployeeDirectoryService(employees).get_employee("missing")
