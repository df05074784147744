import logging
import time
from dataclasses import dataclass

import requests
from requests.structures import CaseInsensitiveDict
from urllib3 import HTTPHeaderDict
from urllib3.exceptions import DecodeError, ProtocolError, ReadTimeoutError, SSLError
from urllib3.util import Timeout, parse_url

from . import __version__
from .args import RequestSpec
from .config import ClientConfig
from .console import stderr
from .errors import BuildError, InvalidURLError, UnsupportedMethodError

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE", "HEAD", "PATCH", "OPTIONS")

HEADER_SEPARATOR = ": "

CHUNK_SIZE = 64 * 1024


@dataclass
class PreparedCall:
    session: requests.Session
    request: requests.PreparedRequest


def _session(config: ClientConfig) -> requests.Session:
    session = requests.Session()
    session.max_redirects = config.max_redirects
    session.headers = CaseInsensitiveDict({"User-Agent": f"curlette/{__version__}"})
    return session


def _check_url(url: str) -> None:
    try:
        parsed = parse_url(url)
    except ValueError as e:
        raise InvalidURLError(url, e) from e
    if not parsed.scheme:
        raise InvalidURLError(url, "relative URL without a scheme")
    if not parsed.host:
        raise InvalidURLError(url, "empty host")


def _split_headers(raw_headers) -> list[tuple[str, str]]:
    headers = []
    for header in raw_headers:
        name, sep, value = header.partition(HEADER_SEPARATOR)
        if not sep:
            logger.debug("skipping header without ': ' separator: %r", header)
            continue
        _check_header(name, value)
        headers.append((name, value))
    return headers


def _check_header(name: str, value: str) -> None:
    if not name or name != name.strip() or any(c in name for c in ":\r\n"):
        raise BuildError(f"Invalid header name {name!r}")
    if "\r" in value or "\n" in value:
        raise BuildError(f"Invalid value for header {name!r}: line breaks are not allowed")
    try:
        name.encode("latin-1")
        value.encode("latin-1")
    except UnicodeEncodeError as e:
        raise BuildError(f"Header {name!r} cannot be sent: {e.reason} {e.object[e.start:e.end]!r}") from e


def _with_headers(prepared: requests.PreparedRequest, headers) -> HTTPHeaderDict:
    merged = HTTPHeaderDict(prepared.headers)
    # a user header replaces the session default of the same name
    for name in {name.lower() for name, _ in headers}:
        merged.discard(name)
    for name, value in headers:
        merged.add(name, value)
    return merged


def build_request(spec: RequestSpec, config: ClientConfig = ClientConfig()) -> PreparedCall:
    if spec.method not in SUPPORTED_METHODS:
        raise UnsupportedMethodError(spec.method)

    _check_url(spec.url)
    headers = _split_headers(spec.headers)

    request = requests.Request(
        method=spec.method,
        url=spec.url,
        data=None if spec.body is None else spec.body.encode("utf-8", errors="surrogateescape"),
    )

    session = _session(config)
    try:
        prepared = session.prepare_request(request)
    except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
        session.close()
        raise InvalidURLError(spec.url, e) from e

    # repeated names go out as separate header lines
    prepared.headers = _with_headers(prepared, headers)

    logger.debug("prepared %s %s", prepared.method, prepared.url)
    return PreparedCall(session, prepared)


def _read_body(response: requests.Response, deadline: float, timeout: float) -> bytes:
    body = bytearray()
    try:
        while True:
            if time.monotonic() > deadline:
                raise requests.exceptions.ReadTimeout(
                    f"Read timed out: no complete response within {timeout} seconds",
                    request=response.request,
                    response=response,
                )
            chunk = response.raw.read1(CHUNK_SIZE, decode_content=True)
            if not chunk:
                return bytes(body)
            body += chunk
    except ReadTimeoutError as e:
        raise requests.exceptions.ReadTimeout(e, request=response.request) from e
    except ProtocolError as e:
        raise requests.exceptions.ChunkedEncodingError(e) from e
    except DecodeError as e:
        raise requests.exceptions.ContentDecodingError(e) from e
    except SSLError as e:
        raise requests.exceptions.SSLError(e) from e


def send_request(call: PreparedCall, config: ClientConfig = ClientConfig()) -> requests.Response:
    deadline = time.monotonic() + config.timeout
    try:
        response = call.session.send(
            call.request,
            timeout=Timeout(total=config.timeout),
            allow_redirects=True,
            stream=True,
        )
        try:
            response._content = _read_body(response, deadline, config.timeout)
        except requests.RequestException:
            response.close()
            raise
        response._content_consumed = True
        return response
    except requests.RequestException as e:
        stderr.print(f"Error sending request: {e}", markup=False)
        logger.debug("request to %s failed: %s", call.request.url, e)
        raise
