from __future__ import annotations
import os


_TRUTHY = {"1", "true", "yes", "on"}

# Defaults
DEFAULT_MAX_DEPTH = 1000
DEFAULT_REPL_HOST = "127.0.0.1"
DEFAULT_REPL_PORT = 8765


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def get_max_depth() -> int:
    return int_from_env('MCLISP_MAX_DEPTH', DEFAULT_MAX_DEPTH)


def get_strict() -> bool:
    return flag_from_env('MCLISP_STRICT')


def get_repl_address() -> tuple[str, int]:
    host = os.environ.get('MCLISP_REPL_HOST') or DEFAULT_REPL_HOST
    return host, int_from_env('MCLISP_REPL_PORT', DEFAULT_REPL_PORT)
