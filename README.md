# probekit

`probekit` is a library of health probes. Each probe checks one thing and
gives back a pair `(ok, message)`: a pass/fail flag and a short message that a
person can read.

## Text checks

`probekit.textcheck.TextChecker` tests output text. `contain` names a string
that must be present. `not_contain` names a string that must be absent. Both
are matched as plain substrings, or as regular expressions when
`regexp=True`.

```python
from probekit.textcheck import TextChecker, check_empty

checker = TextChecker(contain="hello", not_contain="bad")
checker.check("easeprobe hello world")      # passes

regex = TextChecker(contain=r"[0-9]+$", regexp=True)
regex.config()                              # compiles the patterns
regex.check("hello world 2022")             # passes

check_empty("   \t")                        # -> "empty"
```

- A failed check raises `TextCheckError`. Its message names the text or
  pattern that was missing or unexpected.
- `config()` raises `RegexpError` for a pattern that does not compile.
- Lookaround constructs such as `(?=` and `(?!` are rejected, and so are
  back-references such as `\1`.
- `str(checker)` describes the mode and the patterns.

## Host metrics

The `probekit.host` package does not log in to a server or run any command
itself. It builds the shell command to run and parses the text that command
prints. The metrics are:

- `Basic`: host name, OS name, core count
- `CPU`: user, sys, nice, idle and other times
- `Mem`: used and total MiB, usage in %
- `Disks`: usage of each mount point
- `Load`: 1, 5 and 15 minute load averages

Each metric has `command()`, `output_lines()`, `parse(lines)`,
`usage_info()` and `check_threshold()`. Parse failures raise
`MetricParseError`.

`Threshold` holds the alert limits as fractions. A limit left at zero gets its
default when the server is configured:

| Limit | Default |
|-------|---------|
| CPU   | 0.8     |
| Mem   | 0.8     |
| Disk  | 0.95    |
| Load  | 0.8 for each of `m1`, `m5` and `m15`, per core |

Load keys are matched without regard to case.

`HostServer` ties the metrics together. `config()` builds the combined
command and puts it in `command`. With no disks given, it monitors `/`.
`check_output(output)` parses what that command printed and checks every
threshold.

```python
from probekit.host.server import HostServer

server = HostServer(probe_name="web", disks=["/", "/data"])
server.config()
print(server.command)                       # the shell script to run on the host

output = (
    "t01\nUbuntu\n4\n"
    "  71.6 us,  1.7 sy,  0.2 ni, 26.8 id,  0.3 wa,  0.4 hi,  0.5 si,  0.6 st\n"
    "4407 15718 28.04\n"
    "58 97 60% /\n20 80 20% /data\n"
    "4\n0.00 0.03 0.10\n"
)
ok, message = server.check_output(output)
# ok is True
# message == "Fine! ( CPU: 73.20% - Memory: 28.04% - Disk: `/` 60.00%, `/data` 20.00% - Load: 0.00/0.03/0.10 )"
```

When a limit is crossed, the message starts with the alerts, joined by
` | `. Examples are `CPU threshold alert!` and
`Disk Space threshold alert! - [/]`. Output that cannot be parsed gives
`(False, "Prase the output failed: ...")`.

## Native clients

The `probekit.client` package talks to servers directly.

`ClientOptions` holds the connection settings:

- `host`, given as `host:port`
- `driver`
- `username` and `password`
- `data`
- `timeout`, in seconds
- `ca`, `cert` and `key`, the TLS file paths

`check()` raises `ClientConfigError` for a bad host, a bad port or an unknown
driver.

`parse_driver(name)` turns a name into a `DriverType`. An unknown name gives
`DriverType.UNKNOWN`.

```python
from probekit.client.conf import DriverType, parse_driver

parse_driver("postgres") is DriverType.POSTGRESQL
parse_driver("nonsense") is DriverType.UNKNOWN
```

The drivers are:

- `MySQLClient`
- `RedisClient`
- `MemcacheClient`
- `MongoClient`

Each has a `probe()` method that returns `(ok, message)`. `Client` picks the
right one from `options.driver`:

```python
from probekit.client.client import Client
from probekit.client.conf import ClientOptions, DriverType

client = Client(ClientOptions(host="localhost:6379", driver=DriverType.REDIS))
client.config()
ok, message = client.do_probe()
```

When no `data` is set, each driver pings its server. Otherwise it checks the
stored values:

- **MySQL**: keys have the form `database:table:column:key:value`, and the
  last field must be an integer. `MySQLClient.get_sql` turns a key into a
  `SELECT` statement. The value read back must equal the configured one.
- **Redis**: keys are cache keys. Each value must equal the configured one.
- **Memcache**: keys are cache keys. A blank expected value skips the
  comparison for that key.
- **MongoDB**: keys have the form `database:collection`, split by
  `get_db_collection`. Each value is a JSON filter, and at least one document
  must match it.

A malformed data key is reported when the driver is created, by raising
`ClientConfigError`.

## HTTP

`probekit.http_probe.HTTPProbe` sends a request with the configured method,
headers, body and basic-auth credentials.

`config()` does the following:

- Validates the URL and the TLS files.
- Sets an unknown method to `GET`.
- Drops malformed success-code ranges. When none remain, it uses
  `[[0, 499]]`.

Configuration errors raise `HTTPConfigError`.

`do_probe()` passes when the status code falls in a success range and the
body passes `text_checker`. `check_http_method(method)` tells whether a method
name is known, ignoring case.

`probekit.http_trace.TraceStats` records how long each phase took, in
seconds. The phases are DNS, connect, TLS, send, wait, transfer and total.
`to_ms` converts a duration to milliseconds. `HTTPProbe` records only the
wait, transfer and total times.

## What it does not do

`probekit` is a library only:

- It has no command-line program.
- It has no scheduler that runs probes on an interval.
- It sends no notifications.
- It keeps no history of results and exports no metrics.

Host probes take command output that you have gathered yourself, for example
over SSH.

`DriverType` names Kafka, PostgreSQL and ZooKeeper, but there are no drivers
for them. `Client.config()` raises `ClientConfigError("Unknown Driver Type")`
for them.

`HTTPProbe` does not evaluate expressions over the response document.

## Running the tests

```
pip install -e .[test]
pytest
```