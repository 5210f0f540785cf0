"""
Shared fixtures.

Every test gets its own SQLite database file so nothing leaks between
tests. Token verification and the staff directory are replaced with fakes.
"""

import pytest
from fastapi.testclient import TestClient
from jose import JWTError

from lcms_cleaning.database import Gateway
from lcms_cleaning.main import create_app
from lcms_cleaning.service import CleaningService
from lcms_cleaning.staff_member import StaffMember

MANAGER_TOKEN = "manager-token"
STAFF_MEMBER_TOKEN = "staff-member-token"


class FakeVerifier:
    """Accepts a fixed set of bearer tokens."""

    def __init__(self, *tokens):
        self.tokens = set(tokens)

    def verify(self, token):
        if token not in self.tokens:
            raise JWTError("unknown token")
        return {"token_use": "access", "username": token}


class FakePaginator:
    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def paginate(self, **kwargs):
        self.calls.append(kwargs)
        return iter(self.pages)


class FakeCognitoClient:
    def __init__(self, pages):
        self.paginator = FakePaginator(pages)

    def get_paginator(self, operation_name):
        assert operation_name == "list_users"
        return self.paginator


def make_user(first_name, last_name, payroll_number):
    return {
        "Username": f"{first_name.lower()}.{last_name.lower()}",
        "Attributes": [
            {"Name": "given_name", "Value": first_name},
            {"Name": "family_name", "Value": last_name},
            {"Name": "custom:payrollNumber", "Value": str(payroll_number)},
        ],
    }


@pytest.fixture
def gateway(tmp_path):
    gateway = Gateway.from_url(f"sqlite:///{tmp_path / 'test.db'}")
    gateway.create_all()
    yield gateway
    gateway.dispose()


@pytest.fixture
def staff_members():
    client = FakeCognitoClient([
        {"Users": [make_user("Sam", "Jones", 1003), make_user("Alex", "Smith", 1001)]},
        {"Users": [make_user("Jo", "Brown", 1002)]},
    ])
    return StaffMember(client, "eu-west-2_test")


@pytest.fixture
def service(gateway, staff_members):
    return CleaningService(gateway, staff_members)


@pytest.fixture
def areas(service):
    """Ids of two areas created through templates: {"Changing Rooms": id, "Gym": id}."""
    service.create_cleaning_task_template("Mop floors", area_description="Changing Rooms")
    service.create_cleaning_task_template("Wipe machines", area_description="Gym")
    return {row["area_description"]: row["area_id"] for row in service.get_areas()}


@pytest.fixture
def template_ids(service, areas):
    """Ids of the templates "Mop floors", "Wipe machines" and "Empty bins", in creation order."""
    service.create_cleaning_task_template("Empty bins", area_id=areas["Changing Rooms"])
    return [row["cleaning_task_template_id"] for row in service.get_cleaning_task_templates()]


@pytest.fixture
def app(gateway, staff_members):
    return create_app(
        gateway=gateway,
        staff_members=staff_members,
        all_users_verifier=FakeVerifier(MANAGER_TOKEN, STAFF_MEMBER_TOKEN),
        managers_verifier=FakeVerifier(MANAGER_TOKEN),
    )


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def manager_headers():
    return {"Authorization": f"Bearer {MANAGER_TOKEN}"}


@pytest.fixture
def staff_member_headers():
    return {"Authorization": f"Bearer {STAFF_MEMBER_TOKEN}"}
