import os
from dataclasses import dataclass

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_REDIRECTS = 10

LOG_CONFIG_ENV = "CURLETTE_LOG_CONFIG"
DEFAULT_LOG_CONFIG = "config/logging.yaml"


@dataclass(frozen=True)
class ClientConfig:
    # overall deadline in seconds for connecting, sending and reading the whole body
    timeout: float = DEFAULT_TIMEOUT
    max_redirects: int = DEFAULT_MAX_REDIRECTS


def log_config_path() -> str:
    return os.environ.get(LOG_CONFIG_ENV, DEFAULT_LOG_CONFIG)
