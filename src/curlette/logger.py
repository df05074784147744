import logging
import logging.config

import yaml

from .config import log_config_path
from .console import stderr
from .errors import LoggingConfigError

logger = logging.getLogger(__name__)


def load_config(path: str) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise LoggingConfigError(f"cannot read {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise LoggingConfigError(f"malformed {path}: {e}") from e
    if not isinstance(config, dict):
        raise LoggingConfigError(f"malformed {path}: expected a mapping")
    return config


def init_logging(path: str | None = None) -> bool:
    path = path or log_config_path()
    try:
        logging.config.dictConfig(load_config(path))
    except LoggingConfigError as e:
        stderr.print(f"Error initializing logger: {e}", markup=False)
        return False
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        stderr.print(f"Error initializing logger: {path}: {e}", markup=False)
        return False
    logger.debug("logging configured from %s", path)
    return True
