"""
Tests for DatabaseManagementService create and delete.
"""

import re
from unittest.mock import ANY, call, patch

import pytest
from loguru import logger

from services.database_service.exceptions import (
    DatabaseClientFeatureNotEnabledError,
    DatabaseHostNotFoundError,
    DuplicateDatabaseNameError,
    InvalidDatabaseNameError,
    RemoteProvisioningError,
    TooManyDatabasesError,
)
from services.database_service.services import DatabaseManagementService
from services.database_service.services.database_management_service import attempt


def _name(server, label="something"):
    return DatabaseManagementService.generate_unique_database_name(label, server.id)


class TestCreateValidation:
    """Validation failures happen before any remote or local mutation."""

    def test_feature_disabled_rejects_everything(self, service, server, host, gateway):
        service.client_databases_enabled = False

        with pytest.raises(DatabaseClientFeatureNotEnabledError):
            service.create(server, {})

        with pytest.raises(DatabaseClientFeatureNotEnabledError):
            service.create(
                server,
                {"database": _name(server), "database_host_id": host.id, "remote": "%"},
            )

        assert gateway.mock_calls == []

    def test_server_at_limit_cannot_create(
        self, service, make_server, host, make_database, gateway
    ):
        server = make_server(database_limit=2)
        make_database(server, host, "s%d_one" % server.id)
        make_database(server, host, "s%d_two" % server.id, username=f"u{server.id}_klmnopqrst")

        # Quota is checked before the name, so an empty request still hits it.
        with pytest.raises(TooManyDatabasesError):
            service.create(server, {})

        assert gateway.mock_calls == []

    def test_server_below_limit_can_create(self, service, make_server, host, make_database):
        server = make_server(database_limit=2)
        make_database(server, host, "s%d_one" % server.id)

        database = service.create(
            server, {"database": _name(server), "database_host_id": host.id}
        )

        assert database.server_id == server.id

    def test_zero_limit_blocks_creation(self, service, make_server, host):
        server = make_server(database_limit=0)

        with pytest.raises(TooManyDatabasesError):
            service.create(server, {"database": _name(server), "database_host_id": host.id})

    def test_limit_can_be_bypassed_by_internal_callers(self, service, make_server, host):
        server = make_server(database_limit=0)

        database = service.create(
            server,
            {"database": _name(server), "database_host_id": host.id},
            validate_database_limit=False,
        )

        assert database.id is not None

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"database": ""},
            {"database": "something"},
            {"database": "s_something"},
            {"database": "s12s_something"},
            {"database": "s12something"},
        ],
    )
    def test_invalid_name_is_rejected(self, service, server, gateway, data):
        with pytest.raises(InvalidDatabaseNameError, match=re.escape('prefixed with "s{server_id}_"')):
            service.create(server, data)

        assert gateway.mock_calls == []

    @pytest.mark.parametrize("name", [123, 1.5, ["s1_shop"]])
    def test_non_string_name_is_rejected(self, service, server, host, gateway, name):
        with pytest.raises(InvalidDatabaseNameError):
            service.create(server, {"database": name, "database_host_id": host.id})

        assert gateway.mock_calls == []

    def test_name_of_another_server_is_rejected(self, service, make_server, host):
        server = make_server()
        other = make_server()

        with pytest.raises(InvalidDatabaseNameError):
            service.create(server, {"database": _name(other), "database_host_id": host.id})

    def test_name_over_maximum_length_is_rejected(self, service, server, host):
        with pytest.raises(InvalidDatabaseNameError):
            service.create(
                server,
                {"database": f"s{server.id}_" + "a" * 60, "database_host_id": host.id},
            )

    def test_duplicate_name_on_another_host_is_rejected(
        self, service, server, make_host, make_database, database_repository, gateway
    ):
        host = make_host()
        host2 = make_host(name="mysql-02", host="10.0.0.11")
        name = _name(server, "soemthing")
        make_database(server, host, name)

        with pytest.raises(DuplicateDatabaseNameError, match="A database with that name already exists for this server."):
            service.create(server, {"database": name, "database_host_id": host2.id})

        assert gateway.mock_calls == []
        assert database_repository.count_for_server(server.id) == 1
        assert database_repository.find_where(database_host_id=host2.id) == []

    def test_unknown_host_is_rejected(self, service, server, gateway):
        with pytest.raises(DatabaseHostNotFoundError):
            service.create(server, {"database": _name(server), "database_host_id": 999})

        assert gateway.mock_calls == []


class TestCreateProvisioning:
    """Remote provisioning, persistence and compensation."""

    def test_database_can_be_created(
        self, service, server, host, gateway, client_factory, database_repository
    ):
        name = _name(server, "soemthing")

        database = service.create(
            server, {"remote": "%", "database": name, "database_host_id": host.id}
        )

        client_factory.assert_called_once()
        assert client_factory.call_args.args[0].id == host.id

        gateway.create_database.assert_called_once_with(name)
        gateway.create_user.assert_called_once_with(ANY, "%", ANY, None)
        username, _, password, _ = gateway.create_user.call_args.args
        gateway.assign_user_to_database.assert_called_once_with(name, ANY, "%")
        second_username = gateway.assign_user_to_database.call_args.args[1]
        gateway.flush.assert_called_once_with()

        assert re.fullmatch(r"u\d+_[A-Za-z0-9]{10}", username)
        assert username == second_username
        assert len(password) == 24
        assert password != username

        assert database.server_id == server.id
        assert database.database_host_id == host.id
        assert database.username == username
        assert database.password == password
        stored = database_repository.get(database.id)
        assert stored is not None
        assert stored.server_id == server.id

    def test_remote_steps_run_in_order(self, service, server, host, gateway):
        name = _name(server)

        service.create(server, {"database": name, "database_host_id": host.id})

        steps = [c[0] for c in gateway.mock_calls]
        assert steps == ["create_database", "create_user", "assign_user_to_database", "flush"]

    def test_remote_defaults_to_wildcard_and_passes_max_connections(
        self, service, server, host, gateway
    ):
        service.create(
            server,
            {"database": _name(server), "database_host_id": host.id, "max_connections": 10},
        )

        args = gateway.create_user.call_args.args
        assert args[1] == "%"
        assert args[3] == 10

    def test_failure_creating_database_triggers_cleanup(
        self, service, server, host, gateway, database_repository
    ):
        name = _name(server, "soemthing")
        original = RuntimeError("create database failed")
        gateway.create_database.side_effect = original
        gateway.drop_user.side_effect = ValueError("no such user")

        with pytest.raises(RuntimeError) as exc_info:
            service.create(server, {"remote": "%", "database": name, "database_host_id": host.id})

        assert exc_info.value is original
        gateway.drop_database.assert_called_once_with(name)
        gateway.drop_user.assert_called_once_with(ANY, "%")
        assert database_repository.count_for_server(server.id) == 0

    def test_failure_after_user_creation_drops_the_same_user(
        self, service, server, host, gateway, database_repository
    ):
        name = _name(server)
        gateway.assign_user_to_database.side_effect = RemoteProvisioningError("assign_user_to_database", host.id)

        with pytest.raises(RemoteProvisioningError):
            service.create(server, {"database": name, "database_host_id": host.id})

        created_user = gateway.create_user.call_args.args[0]
        gateway.drop_user.assert_called_once_with(created_user, "%")
        gateway.drop_database.assert_called_once_with(name)
        assert database_repository.count_for_server(server.id) == 0

    def test_failed_flush_is_compensated(self, service, server, host, gateway, database_repository):
        gateway.flush.side_effect = [RemoteProvisioningError("flush", host.id), None]

        with pytest.raises(RemoteProvisioningError):
            service.create(server, {"database": _name(server), "database_host_id": host.id})

        gateway.drop_database.assert_called_once()
        gateway.drop_user.assert_called_once()
        assert database_repository.count_for_server(server.id) == 0

    def test_cleanup_errors_never_mask_the_original_error(self, service, server, host, gateway):
        gateway.create_user.side_effect = RemoteProvisioningError("create_user", host.id)
        gateway.drop_database.side_effect = RuntimeError("drop database failed")
        gateway.drop_user.side_effect = RuntimeError("drop user failed")
        gateway.flush.side_effect = RuntimeError("flush failed")

        with pytest.raises(RemoteProvisioningError) as exc_info:
            service.create(server, {"database": _name(server), "database_host_id": host.id})

        assert exc_info.value.operation == "create_user"

    def test_interrupt_still_triggers_cleanup(self, service, server, host, gateway, database_repository):
        gateway.create_user.side_effect = KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            service.create(server, {"database": _name(server), "database_host_id": host.id})

        gateway.drop_database.assert_called_once()
        gateway.drop_user.assert_called_once()
        assert database_repository.count_for_server(server.id) == 0

    def test_unique_constraint_race_surfaces_as_duplicate(
        self, service, server, host, make_database, gateway
    ):
        name = _name(server)
        make_database(server, host, name)

        # Simulate a concurrent request that passed the pre-flight check.
        with patch.object(service.databases, "find_first_where", return_value=None):
            with pytest.raises(DuplicateDatabaseNameError):
                service.create(server, {"database": name, "database_host_id": host.id})

        # Remote objects are left in place once the host committed.
        gateway.flush.assert_called_once()
        gateway.drop_database.assert_not_called()


class TestDelete:
    """Tests for DatabaseManagementService.delete."""

    def test_delete_removes_remote_objects_then_record(
        self, service, server, host, make_database, gateway, database_repository
    ):
        database = make_database(server, host, _name(server))

        assert service.delete(database.id) is True

        assert gateway.mock_calls == [
            call.drop_user(database.username, "%"),
            call.drop_database(database.database),
            call.flush(),
        ]
        assert database_repository.get(database.id) is None

    def test_delete_unknown_database_is_a_noop(self, service, gateway):
        assert service.delete(12345) is False
        assert gateway.mock_calls == []

    def test_remote_failure_keeps_the_record(
        self, service, server, host, make_database, gateway, database_repository
    ):
        database = make_database(server, host, _name(server))
        gateway.drop_database.side_effect = RemoteProvisioningError("drop_database", host.id)

        with pytest.raises(RemoteProvisioningError):
            service.delete(database.id)

        assert database_repository.get(database.id) is not None


class TestAttempt:
    """Tests for the best-effort helper used during cleanup."""

    @pytest.fixture
    def warnings(self):
        messages = []
        handler_id = logger.add(messages.append, level="WARNING", format="{message}")
        yield messages
        logger.remove(handler_id)

    def test_failure_is_returned_and_logged(self, warnings):
        error = RuntimeError("drop database failed")

        def fail(name):
            raise error

        result = attempt("dropping database 's1_shop'", fail, "s1_shop")

        assert result is error
        assert len(warnings) == 1
        assert "dropping database 's1_shop'" in warnings[0]
        assert "drop database failed" in warnings[0]

    def test_success_returns_none(self, warnings):
        calls = []

        assert attempt("flushing privileges", calls.append, "flush") is None
        assert calls == ["flush"]
        assert warnings == []
