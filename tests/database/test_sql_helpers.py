from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.member_portal.member_portal.core.exceptions import BackendError
from src.member_portal.member_portal.database.bootstrap import iter_sql_statements
from src.member_portal.member_portal.database.mysql_base import as_date, db_cursor, is_duplicate_key


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, error=None):
        self.conn = conn or FakeConn()
        self.error = error

    def connect(self):
        if self.error:
            raise self.error
        return self.conn


def test_db_cursor_commits_on_success():
    factory = FakeFactory()
    with db_cursor(factory) as (conn, cur):
        assert cur is factory.conn.cursor_obj

    assert factory.conn.committed
    assert factory.conn.cursor_obj.closed
    assert factory.conn.closed


def test_db_cursor_keeps_integrity_errors():
    factory = FakeFactory()
    with pytest.raises(mysql.connector.IntegrityError):
        with db_cursor(factory):
            raise mysql.connector.IntegrityError(msg="dup", errno=errorcode.ER_DUP_ENTRY)

    assert factory.conn.rolled_back
    assert not factory.conn.committed


def test_db_cursor_wraps_other_connector_errors():
    factory = FakeFactory()
    with pytest.raises(BackendError):
        with db_cursor(factory):
            raise mysql.connector.DatabaseError(msg="lost connection")
    assert factory.conn.rolled_back


def test_db_cursor_connection_failure():
    factory = FakeFactory(error=mysql.connector.InterfaceError(msg="refused"))
    with pytest.raises(BackendError):
        with db_cursor(factory):
            pass


def test_is_duplicate_key():
    assert is_duplicate_key(mysql.connector.IntegrityError(msg="dup", errno=errorcode.ER_DUP_ENTRY))
    assert not is_duplicate_key(mysql.connector.IntegrityError(msg="fk", errno=errorcode.ER_NO_REFERENCED_ROW_2))


def test_as_date():
    assert as_date(None) is None
    assert as_date(date(2025, 3, 10)) == date(2025, 3, 10)
    assert as_date(datetime(2025, 3, 10, 13, 0)) == date(2025, 3, 10)
    assert as_date("2025-03-10 00:00:00") == date(2025, 3, 10)


def test_iter_sql_statements_ignores_quoted_semicolons():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT 1;\n  \nSELECT 'it''s'"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1", "SELECT 'it''s'"]
