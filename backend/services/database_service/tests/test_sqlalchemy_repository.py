"""
Tests for the SQLAlchemy record store.
"""

import pytest

from services.database_service.exceptions import DuplicateDatabaseNameError


class TestDatabaseRepository:
    def test_create_assigns_id_and_timestamps(self, database_repository, server, host, make_database):
        record = make_database(server, host, f"s{server.id}_shop")

        assert record.id is not None
        assert record.created_at is not None
        assert database_repository.get(record.id).database == f"s{server.id}_shop"

    def test_password_is_never_persisted(self, database_repository, server, host, make_database):
        record = make_database(server, host, f"s{server.id}_shop")
        record.password = "not-stored"

        assert database_repository.get(record.id).password is None

    def test_count_and_list_are_scoped_to_server(
        self, database_repository, make_server, host, make_database
    ):
        first = make_server()
        second = make_server()
        make_database(first, host, f"s{first.id}_a")
        make_database(first, host, f"s{first.id}_b")
        make_database(second, host, f"s{second.id}_a")

        assert database_repository.count_for_server(first.id) == 2
        assert database_repository.count_for_server(second.id) == 1
        names = [d.database for d in database_repository.get_databases_for_server(first.id)]
        assert names == [f"s{first.id}_a", f"s{first.id}_b"]

    def test_find_first_where(self, database_repository, server, host, make_database):
        make_database(server, host, f"s{server.id}_shop")

        assert database_repository.find_first_where(database=f"s{server.id}_shop") is not None
        assert database_repository.find_first_where(database=f"s{server.id}_other") is None

    def test_unique_name_violation_becomes_duplicate_error(
        self, database_repository, make_server, make_host, make_database
    ):
        server = make_server()
        host = make_host()
        other_host = make_host(name="mysql-02", host="10.0.0.11")
        make_database(server, host, f"s{server.id}_shop")

        with pytest.raises(DuplicateDatabaseNameError) as exc_info:
            make_database(server, other_host, f"s{server.id}_shop")

        assert exc_info.value.status_code == 409
        assert exc_info.value.internal_error is not None
        assert database_repository.count_for_server(server.id) == 1

    def test_delete(self, database_repository, server, host, make_database):
        record = make_database(server, host, f"s{server.id}_shop")

        assert database_repository.delete(record.id) is True
        assert database_repository.get(record.id) is None
        assert database_repository.delete(record.id) is False


class TestDatabaseHostRepository:
    def test_get_hosts_for_node(self, host_repository, make_host):
        make_host(node_id=1)
        make_host(name="mysql-02", node_id=2)

        hosts = host_repository.get_hosts_for_node(2)

        assert [h.name for h in hosts] == ["mysql-02"]

    def test_repr_hides_password(self, host):
        assert "secret" not in repr(host)
