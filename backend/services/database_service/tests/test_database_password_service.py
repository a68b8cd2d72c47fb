"""
Tests for DatabasePasswordService.
"""

from unittest.mock import call

import pytest

from services.database_service.exceptions import (
    DatabaseHostNotFoundError,
    RemoteProvisioningError,
)
from services.database_service.services import DatabasePasswordService


@pytest.fixture
def password_service(host_repository, client_factory):
    return DatabasePasswordService(hosts=host_repository, client_factory=client_factory)


def test_rotate_changes_password_in_place(
    password_service, server, host, make_database, gateway
):
    database = make_database(server, host, f"s{server.id}_shop", max_connections=3)

    password = password_service.rotate(database)

    assert len(password) == 24
    assert database.password == password
    assert gateway.mock_calls == [
        call.update_user_password(database.username, "%", password),
        call.flush(),
    ]


def test_rotate_returns_a_new_password_each_time(password_service, server, host, make_database):
    database = make_database(server, host, f"s{server.id}_shop")

    assert password_service.rotate(database) != password_service.rotate(database)


def test_rotate_unknown_host(password_service, server, host, make_database, gateway):
    database = make_database(server, host, f"s{server.id}_shop")
    database.database_host_id = 999

    with pytest.raises(DatabaseHostNotFoundError):
        password_service.rotate(database)

    assert gateway.mock_calls == []


def test_rotate_propagates_host_errors(password_service, server, host, make_database, gateway):
    database = make_database(server, host, f"s{server.id}_shop")
    gateway.update_user_password.side_effect = RemoteProvisioningError(
        "update_user_password", host.id
    )

    with pytest.raises(RemoteProvisioningError):
        password_service.rotate(database)

    assert database.password is None


@pytest.mark.parametrize("failing_step", ["update_user_password", "flush"])
def test_failed_rotation_never_drops_the_user(
    password_service, server, host, make_database, database_repository, gateway, failing_step
):
    database = make_database(server, host, f"s{server.id}_shop")
    getattr(gateway, failing_step).side_effect = RemoteProvisioningError(failing_step, host.id)

    with pytest.raises(RemoteProvisioningError):
        password_service.rotate(database)

    gateway.drop_user.assert_not_called()
    gateway.create_user.assert_not_called()
    assert database_repository.get(database.id) is not None
