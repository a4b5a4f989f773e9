import logging
import os
from typing import Optional

from dotenv import load_dotenv

from method_guards.exceptions.common_exceptions import EnvInvalidException

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def configure_env(env_file_name: Optional[str] = None) -> None:
    """
    Load guard settings from an environment file and refresh `method_guards.config`.

    Args:
        env_file_name: Optional environment file name. If None, tries `.env.<ENV>` then `.env`.
    """
    from method_guards import config

    if env_file_name is not None:
        load_dotenv(env_file_name, override=True)
        config.reload()
        return

    environment = os.getenv("ENV", "debug")

    for env_file in [f".env.{environment}", ".env"]:
        if load_dotenv(env_file, override=True):
            logging.debug(f"[GUARD] Loaded {env_file} file successfully")
            break

    config.reload()


def env_flag(env_name: str, default: bool) -> bool:
    """Read a boolean environment variable."""
    raw = os.getenv(env_name)
    if raw is None or raw.strip() == "":
        return default

    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise EnvInvalidException(env_name, raw, supported_values=[*_TRUTHY, *_FALSY])


def env_int(env_name: str, default: int) -> int:
    raw = os.getenv(env_name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise EnvInvalidException(env_name, raw) from None
