import argparse
import sys
from dataclasses import dataclass

from . import __version__

DESCRIPTION = "curlette: a small curl-like HTTP client built on requests."


@dataclass(frozen=True)
class RequestSpec:
    method: str
    url: str
    headers: tuple[str, ...] = ()
    body: str | None = None
    verbose: bool = False


class ArgumentParser(argparse.ArgumentParser):
    # usage errors (a missing url) exit with 1, not argparse's 2
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="curlette", description=DESCRIPTION)
    parser.add_argument("url", help="the URL to send the request to")
    parser.add_argument(
        "-X",
        "--request",
        dest="method",
        default="GET",
        help="request method (GET, POST, PUT, DELETE, HEAD, PATCH, OPTIONS), default GET",
    )
    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        default=[],
        help="request header ('NAME: VALUE'), may be given more than once",
    )
    parser.add_argument("-d", "--data", dest="body", help="data to send as the request body")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="show the outgoing request and the response metadata",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv=None) -> RequestSpec:
    args = build_parser().parse_args(argv)
    return RequestSpec(
        method=args.method.upper(),
        url=args.url,
        headers=tuple(args.headers),
        body=args.body,
        verbose=args.verbose,
    )
