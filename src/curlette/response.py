import logging

import requests
from rich.text import Text

from .args import RequestSpec
from .console import stderr, stdout

logger = logging.getLogger(__name__)

RULE_WIDTH = 40


def status_style(status_code: int) -> str:
    if 200 <= status_code < 400:
        return "bold green"
    if 400 <= status_code < 500:
        return "bold yellow"
    return "bold red"


def header_text(value) -> str:
    # values that are not plain ASCII render empty
    if isinstance(value, bytes):
        try:
            return value.decode("ascii")
        except UnicodeDecodeError:
            return ""
    try:
        value.encode("ascii")
    except UnicodeEncodeError:
        return ""
    return value


def declared_charset(response: requests.Response) -> str | None:
    content_type = response.headers.get("Content-Type")
    if not content_type:
        return None
    _, params = requests.utils._parse_content_type_header(content_type)
    charset = params.get("charset")
    return charset if isinstance(charset, str) and charset else None


def body_text(response: requests.Response) -> str:
    """Decode the whole body with the charset named in Content-Type, UTF-8 otherwise.

    requests guesses ISO-8859-1 for any charset-less ``text/*`` type, so
    ``response.encoding`` is not used. Raises ``requests.RequestException``
    when the body cannot be read and ``UnicodeDecodeError``/``LookupError``
    when it cannot be decoded.
    """
    content = response.content or b""
    return content.decode(declared_charset(response) or "utf-8")


def _print_headers(headers) -> None:
    for k, v in headers.items():
        stdout.print(Text.assemble((k, "cyan"), ": ", (header_text(v), "magenta")))


def render_response(response: requests.Response) -> None:
    status = f"{response.status_code} {response.reason or ''}".rstrip()
    stdout.print(Text.assemble(("Status", status_style(response.status_code)), f": {status}"))

    _print_headers(response.headers)

    stdout.print()
    stdout.print(Text("-" * RULE_WIDTH, style="blue"))

    try:
        body = body_text(response)
    except (requests.RequestException, UnicodeDecodeError, LookupError) as e:
        logger.debug("undecodable body from %s", response.url)
        stderr.print(f"Error reading response body: {e}", markup=False)
        return

    stdout.print()
    stdout.print(Text("Body", style="bold blue"), ":", sep="")
    # written as is: rich would strip carriage returns and expand tabs
    stdout.file.write(body + "\n")
    stdout.file.flush()


def trace_request(spec: RequestSpec) -> None:
    stdout.print(Text("Verbose mode enabled", style="bold yellow"))
    stdout.print(Text.assemble(("Request Method", "bold green"), f": {spec.method}"))
    stdout.print(Text.assemble(("Request URL", "bold green"), f": {spec.url}"))
    for header in spec.headers:
        stdout.print(Text.assemble(("Header", "cyan"), f": {header}"))
    if spec.body is not None:
        stdout.print(Text.assemble(("Request Body", "bold blue"), f": {spec.body}"))


def trace_response(response: requests.Response) -> None:
    status = f"{response.status_code} {response.reason or ''}".rstrip()
    stdout.print(Text.assemble(("Response Status", "bold green"), f": {status}"))
    stdout.print(Text.assemble(("Response Headers", "bold green"), ":"))
    _print_headers(response.headers)
