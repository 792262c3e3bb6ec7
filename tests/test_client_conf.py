import pytest

from probekit.client.conf import (
    ClientConfigError,
    ClientOptions,
    DriverType,
    parse_driver,
)


@pytest.mark.parametrize(
    "name, driver",
    [
        ("mysql", DriverType.MYSQL),
        ("redis", DriverType.REDIS),
        ("memcache", DriverType.MEMCACHE),
        ("kafka", DriverType.KAFKA),
        ("mongo", DriverType.MONGO),
        ("postgres", DriverType.POSTGRESQL),
        ("zookeeper", DriverType.ZOOKEEPER),
        ("unknown", DriverType.UNKNOWN),
    ],
)
def test_driver_round_trip(name, driver):
    assert parse_driver(name) is driver
    assert str(driver) == name


def test_unknown_driver_name():
    assert parse_driver("bad") is DriverType.UNKNOWN
    assert parse_driver("MySQL") is DriverType.UNKNOWN
    assert parse_driver("") is DriverType.UNKNOWN


@pytest.mark.parametrize("host", ["localhost:3306", "127.0.0.1:3306", "[::1]:3306"])
def test_check_good_hosts(host):
    opts = ClientOptions(host=host, driver=DriverType.MYSQL)
    opts.check()
    assert opts.host == host


def test_check_unknown_driver():
    opts = ClientOptions(host="localhost:3306", driver=DriverType.UNKNOWN)
    with pytest.raises(ClientConfigError, match="Unknown driver"):
        opts.check()


@pytest.mark.parametrize("host", ["localhost", "localhost:3306:1234"])
def test_check_invalid_host(host):
    opts = ClientOptions(host=host, driver=DriverType.UNKNOWN)
    with pytest.raises(ClientConfigError, match="Invalid Host"):
        opts.check()


@pytest.mark.parametrize("host", ["10.10.10.1:asdf", "10.10.10.1:123456", "10.10.10.1:0", "h:"])
def test_check_invalid_port(host):
    opts = ClientOptions(host=host, driver=DriverType.MYSQL)
    with pytest.raises(ClientConfigError, match="Invalid Port"):
        opts.check()


def test_endpoint_defaults_port():
    assert ClientOptions(host="example.com")._endpoint(3306) == ("example.com", 3306)
    assert ClientOptions(host="example.com:1234")._endpoint(3306) == ("example.com", 1234)


def test_tls_context_none_without_files():
    assert ClientOptions()._tls_context() is None


def test_tls_context_bad_files(tmp_path):
    opts = ClientOptions(
        ca=str(tmp_path / "ca.pem"),
        cert=str(tmp_path / "cert.pem"),
        key=str(tmp_path / "key.pem"),
    )
    with pytest.raises(ClientConfigError, match="TLS Config Error"):
        opts._tls_context()