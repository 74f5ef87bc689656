from __future__ import annotations

from datetime import time, timedelta

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.daysflow_hr.daysflow_hr.core.exceptions import ConstraintViolation, StoreError
from src.daysflow_hr.daysflow_hr.database.mysql_base import db_cursor, normalize_mysql_time


class FakeCursor:
    def __init__(self, error=None):
        self._error = error
        self.closed = False

    def execute(self, sql, params=None):
        if self._error:
            raise self._error

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, connect_error=None):
        self._conn = conn
        self._connect_error = connect_error

    def connect(self):
        if self._connect_error:
            raise self._connect_error
        return self._conn


def test_commits_on_success():
    conn = FakeConn(FakeCursor())

    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert conn.committed and conn.closed
    assert not conn.rolled_back


def test_duplicate_key_becomes_constraint_violation():
    error = mysql.connector.Error(msg="Duplicate entry '1-3-2024'", errno=errorcode.ER_DUP_ENTRY)
    conn = FakeConn(FakeCursor(error))

    with pytest.raises(ConstraintViolation):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("INSERT ...")

    assert conn.rolled_back and conn.closed
    assert not conn.committed


def test_other_driver_errors_become_store_error():
    error = mysql.connector.Error(msg="Lock wait timeout exceeded", errno=errorcode.ER_LOCK_WAIT_TIMEOUT)
    conn = FakeConn(FakeCursor(error))

    with pytest.raises(StoreError) as excinfo:
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("UPDATE ...")

    assert not isinstance(excinfo.value, ConstraintViolation)
    assert conn.rolled_back


def test_connection_failure_is_store_error():
    factory = FakeFactory(connect_error=mysql.connector.Error(msg="Can't connect", errno=errorcode.CR_CONN_HOST_ERROR))

    with pytest.raises(StoreError):
        with db_cursor(factory):
            pass


def test_domain_errors_pass_through_after_rollback():
    conn = FakeConn(FakeCursor())

    with pytest.raises(ValueError):
        with db_cursor(FakeFactory(conn)):
            raise ValueError("boom")

    assert conn.rolled_back and conn.closed


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        (time(8, 30), time(8, 30)),
        (timedelta(hours=17, minutes=5), time(17, 5)),
        ("09:15:30", time(9, 15, 30)),
        ("09:15", time(9, 15)),
    ],
)
def test_normalize_mysql_time(raw, expected):
    assert normalize_mysql_time(raw) == expected
