"""HTTP probe: sends a request and checks the status code and the body."""

from __future__ import annotations

import logging
import ssl
from dataclasses import dataclass, field
from urllib.parse import urlsplit

import requests

from probekit.http_trace import TraceStats
from probekit.textcheck import TextCheckError, TextChecker

__all__ = ["HTTPProbe", "HTTPConfigError", "check_http_method", "USER_AGENT"]

logger = logging.getLogger(__name__)

USER_AGENT = "probekit"

_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "CONNECT", "OPTIONS", "TRACE")
_SCHEME_CHARS = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789+-.")


class HTTPConfigError(ValueError):
    """The HTTP probe configuration is not valid."""


def check_http_method(method: str) -> bool:
    """Whether the method is a known HTTP method, ignoring case."""
    return method.upper() in _METHODS


def _has_control_char(text: str) -> bool:
    return any(ord(char) < 0x20 or ord(char) == 0x7F for char in text)


def _parse_request_uri(raw: str) -> None:
    """Validate a URL the way a request line needs it; raise HTTPConfigError."""
    if raw == "":
        raise HTTPConfigError('parse "": empty url')
    if _has_control_char(raw):
        raise HTTPConfigError(f'parse "{raw}": net/url: invalid control character in URL')
    if raw.startswith("/"):
        return
    scheme = ""
    rest = raw
    if raw[0].isalpha() and raw[0].isascii():
        colon = raw.find(":")
        if colon > 0 and all(c in _SCHEME_CHARS for c in raw[:colon]):
            scheme, rest = raw[:colon], raw[colon + 1 :]
    elif raw[0] == ":":
        raise HTTPConfigError(f'parse "{raw}": missing protocol scheme')
    if not scheme:
        raise HTTPConfigError(f'parse "{raw}": invalid URI for request')
    if rest.startswith("/"):
        try:
            urlsplit(raw).port
        except ValueError as exc:
            raise HTTPConfigError(f'parse "{raw}": {exc}') from exc


def _format_ranges(ranges: list[list[int]]) -> str:
    return "[" + " ".join(f"[{low} {high}]" for low, high in ranges) + "]"


@dataclass
class HTTPProbe:
    """A probe that checks an HTTP endpoint."""

    probe_name: str = ""
    url: str = ""
    proxy: str = ""
    content_encoding: str = ""
    method: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    text_checker: TextChecker = field(default_factory=TextChecker)
    user: str = ""
    password: str = ""
    success_code: list[list[int]] = field(default_factory=list)
    insecure: bool = False
    ca: str = ""
    cert: str = ""
    key: str = ""
    timeout: float = 30.0
    probe_kind: str = ""
    probe_tag: str = ""

    trace_stats: TraceStats | None = field(default=None, init=False, repr=False)
    _proxies: dict[str, str] | None = field(default=None, init=False, repr=False)

    def _check_tls(self) -> None:
        if not (self.ca or self.cert or self.key):
            return
        try:
            context = ssl.create_default_context(cafile=self.ca or None)
            if self.cert:
                context.load_cert_chain(self.cert, self.key or None)
        except (OSError, ssl.SSLError) as exc:
            raise HTTPConfigError(f"TLS Config Error - {exc}") from exc

    def config(self) -> None:
        """Validate and normalise the settings; raise on an invalid one."""
        self.probe_kind = "http"
        self.probe_tag = ""

        try:
            _parse_request_uri(self.url)
        except HTTPConfigError as exc:
            logger.error("[%s / %s] URL is not valid - %s url=%s",
                         self.probe_kind, self.probe_name, exc, self.url)
            raise

        try:
            self._check_tls()
        except HTTPConfigError as exc:
            logger.error("[%s / %s] TLS configuration error - %s",
                         self.probe_kind, self.probe_name, exc)
            raise
        logger.debug("[%s / %s] the security checks %s",
                     self.probe_kind, self.probe_name, str(self.insecure).lower())

        self._proxies = None
        proxy = self.proxy.strip()
        if proxy:
            if _has_control_char(self.proxy):
                logger.error("[%s / %s] proxy URL is not valid", self.probe_kind, self.probe_name)
                raise HTTPConfigError(
                    f'parse "{self.proxy}": net/url: invalid control character in URL'
                )
            self._proxies = {"http": self.proxy, "https": self.proxy}
            logger.debug("[%s / %s] proxy server is %s",
                         self.probe_kind, self.probe_name, self.proxy)

        if not check_http_method(self.method):
            self.method = "GET"

        ranges: list[list[int]] = []
        for code_range in self.success_code:
            if len(code_range) != 2:
                logger.warning("[%s/ %s] HTTP Success Code range is not valid - %s, skip",
                               self.probe_kind, self.probe_name, code_range)
                continue
            ranges.append([code_range[0], code_range[1]])
        self.success_code = ranges or [[0, 499]]

        self.text_checker.config()
        logger.debug("[%s / %s] configuration: %r", self.probe_kind, self.probe_name, self)

    def _request_headers(self) -> dict[str, str]:
        headers = {"User-Agent": USER_AGENT, "Connection": "close"}
        if self.content_encoding:
            headers["Content-Type"] = self.content_encoding
        for key, value in self.headers.items():
            if key.lower() == "host":
                headers["Host"] = value
            else:
                headers[key] = value
        return headers

    def _verify(self) -> bool | str:
        if self.insecure:
            return False
        return self.ca or True

    def _cert(self) -> tuple[str, str] | str | None:
        if self.cert and self.key:
            return self.cert, self.key
        return self.cert or None

    def do_probe(self) -> tuple[bool, str]:
        """Send the request and return (ok, message)."""
        try:
            request = requests.Request(
                self.method,
                self.url,
                data=self.body.encode() if self.body else None,
                headers=self._request_headers(),
                auth=(self.user, self.password) if self.user and self.password else None,
            ).prepare()
        except (requests.RequestException, ValueError) as exc:
            return False, f"HTTP request error - {exc}"

        trace = TraceStats(kind=self.probe_kind, tag="TRACE", name=self.probe_name)
        self.trace_stats = trace
        trace.get_conn(urlsplit(self.url).netloc)

        with requests.Session() as session:
            trace.wrote_request()
            try:
                response = session.send(
                    request,
                    timeout=self.timeout,
                    proxies=self._proxies,
                    verify=self._verify(),
                    cert=self._cert(),
                    allow_redirects=True,
                    stream=True,
                )
            except requests.RequestException as exc:
                trace.done()
                logger.error("[%s / %s] error making get request: %s",
                             self.probe_kind, self.probe_name, exc)
                return False, f"Error: {exc}"
            trace.got_first_response_byte()
            with response:
                try:
                    content = response.content
                except requests.RequestException as exc:
                    trace.done()
                    return False, f"Error: {exc}"
            trace.done()

        status = response.status_code
        if not any(low <= status <= high for low, high in self.success_code):
            return (
                False,
                f"HTTP Status Code is {status}. It missed in {_format_ranges(self.success_code)}",
            )

        result = True
        message = f"HTTP Status Code is {status}"
        logger.debug("[%s / %s] - %s", self.probe_kind, self.probe_name, self.text_checker)
        try:
            self.text_checker.check(content.decode("utf-8", errors="replace"))
        except TextCheckError as exc:
            logger.error("[%s / %s] - %s", self.probe_kind, self.probe_name, exc)
            message += f". Error: {exc}"
            result = False
        return result, message