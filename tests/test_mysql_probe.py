from unittest import mock

import pymysql
import pytest

from probekit.client.conf import ClientConfigError, ClientOptions, DriverType
from probekit.client.mysql_probe import MySQLClient


def make_options(**kwargs):
    password = "password"
    base = dict(host="example.com", driver=DriverType.MYSQL, username="user", password=password)
    base.update(kwargs)
    return ClientOptions(**base)


def make_conn(row=("expected",)):
    conn = mock.MagicMock()
    cursor = mock.MagicMock()
    cursor.fetchone.return_value = row
    conn.cursor.return_value.__enter__.return_value = cursor
    return conn, cursor


def test_tls_config_error(tmp_path):
    opts = make_options(ca=str(tmp_path / "ca"), cert=str(tmp_path / "cert"), key=str(tmp_path / "key"))
    with pytest.raises(ClientConfigError, match="TLS Config Error"):
        MySQLClient(opts)


def test_kind_and_no_tls():
    client = MySQLClient(make_options())
    assert client.kind == "MySQL"
    assert client.tls is None


def test_ping_success():
    client = MySQLClient(make_options())
    conn, cursor = make_conn()
    with mock.patch("pymysql.connect", return_value=conn) as connect:
        ok, message = client.probe()
    assert ok is True
    assert "Successfully" in message
    kwargs = connect.call_args.kwargs
    assert kwargs["host"] == "example.com"
    assert kwargs["port"] == 3306
    assert kwargs["user"] == "user"
    cursor.execute.assert_called_once_with('show status like "uptime"')
    conn.close.assert_called_once()


def test_ping_query_error():
    client = MySQLClient(make_options())
    conn, cursor = make_conn()
    cursor.execute.side_effect = pymysql.err.OperationalError(1105, "query error")
    with mock.patch("pymysql.connect", return_value=conn):
        ok, message = client.probe()
    assert ok is False
    assert "query error" in message


def test_ping_error():
    client = MySQLClient(make_options())
    conn, _ = make_conn()
    conn.ping.side_effect = pymysql.err.OperationalError(2003, "ping error")
    with mock.patch("pymysql.connect", return_value=conn):
        ok, message = client.probe()
    assert ok is False
    assert "ping error" in message


def test_connect_error():
    client = MySQLClient(make_options())
    with mock.patch("pymysql.connect", side_effect=pymysql.err.OperationalError(2003, "connect error")):
        ok, message = client.probe()
    assert ok is False
    assert "connect error" in message


@pytest.mark.parametrize(
    "data, text",
    [
        ({"": ""}, "Empty SQL data"),
        ({"key": "value"}, "Invalid SQL data"),
        ({"database:table:column:key:value": "expected"}, "the value must be int"),
    ],
)
def test_bad_data(data, text):
    with pytest.raises(ClientConfigError, match=text):
        MySQLClient(make_options(data=data))


def test_get_sql():
    client = MySQLClient(make_options())
    assert (
        client.get_sql("database:table:column:key:1")
        == "SELECT `column` FROM `database`.`table` WHERE `key` = 1"
    )


def test_data_verification():
    client = MySQLClient(make_options(data={"database:table:column:key:1": "expected"}))
    conn, cursor = make_conn(("expected",))
    with mock.patch("pymysql.connect", return_value=conn):
        ok, message = client.probe()
        assert ok is True
        assert "Successfully" in message

        cursor.fetchone.return_value = ("unexpected",)
        ok, message = client.probe()
        assert ok is False
        assert "Value not match" in message

        cursor.fetchone.return_value = None
        ok, message = client.probe()
        assert ok is False
        assert "No data" in message

        cursor.execute.side_effect = pymysql.err.OperationalError(1105, "query error")
        ok, message = client.probe()
        assert ok is False
        assert "query error" in message


def test_data_invalid_at_probe():
    client = MySQLClient(make_options())
    client.options.data = {"key": "value"}
    conn, _ = make_conn()
    with mock.patch("pymysql.connect", return_value=conn):
        ok, message = client.probe()
    assert ok is False
    assert "Invalid SQL data" in message