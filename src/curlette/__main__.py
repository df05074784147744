import sys

import requests

from .args import parse_args
from .config import ClientConfig
from .console import stderr
from .errors import BuildError
from .logger import init_logging
from .request import build_request, send_request
from .response import render_response, trace_request, trace_response


def main(argv=None, config: ClientConfig = ClientConfig()) -> int:
    init_logging()

    spec = parse_args(argv)

    if spec.verbose:
        trace_request(spec)

    try:
        call = build_request(spec, config)
    except BuildError as e:
        stderr.print(f"Failed to build request: {e}", markup=False)
        return 1

    with call.session:
        try:
            response = send_request(call, config)
        except requests.RequestException as e:
            stderr.print(f"Failed to send request: {e}", markup=False)
            return 1

        with response:
            if spec.verbose:
                trace_response(response)
            render_response(response)

    return 0


if __name__ == "__main__":
    sys.exit(main())
