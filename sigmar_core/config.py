from __future__ import annotations

import logging
import os
from typing import Optional

DEFAULT_MAX_ATTEMPTS = 50

_TRUTHY = ('1', 'true', 'yes', 'on')


def env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def debug_enabled() -> bool:
    return env_flag('SIGMAR_DEBUG')


def max_generation_attempts() -> int:
    """Attempt cap for verified generation; SIGMAR_MAX_ATTEMPTS overrides, bad values fall back."""
    raw = os.getenv('SIGMAR_MAX_ATTEMPTS')
    if not raw:
        return DEFAULT_MAX_ATTEMPTS
    try:
        value = int(raw)
    except ValueError:
        logging.getLogger(__name__).warning('ignoring SIGMAR_MAX_ATTEMPTS=%r', raw)
        return DEFAULT_MAX_ATTEMPTS
    return max(1, value)


def configure_logging() -> None:
    """Installs a root handler once; DEBUG when SIGMAR_DEBUG is set, else WARNING."""
    level = logging.DEBUG if debug_enabled() else logging.WARNING
    logging.basicConfig(level=level, format='[%(name)s] %(levelname)s %(message)s')
    logging.getLogger('sigmar_core').setLevel(level)


def solver_node_limit() -> Optional[int]:
    """Node budget per verification from SIGMAR_SOLVER_NODE_LIMIT; unset or non-positive means exhaustive."""
    raw = os.getenv('SIGMAR_SOLVER_NODE_LIMIT')
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logging.getLogger(__name__).warning('ignoring SIGMAR_SOLVER_NODE_LIMIT=%r', raw)
        return None
    return value if value > 0 else None
