"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv


# Load environment variables from .env file
load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from swapwatch.helpers.config import get_required_env

        pool = get_required_env("POOL_ADDRESS")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_int_env(key: str, default: int) -> int:
    """Get an integer environment variable.

    Args:
        key: Environment variable name
        default: Value used when the variable is unset or empty

    Returns:
        Parsed integer value

    Raises:
        ValueError: If the variable is set but is not an integer

    Example:
        ```python
        from swapwatch.helpers.config import get_int_env

        depth = get_int_env("CONFIRMATION_DEPTH", 6)
        ```
    """
    value = os.getenv(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        msg = f"{key} must be an integer, got {value!r}"
        raise ValueError(msg) from None


def get_bool_env(key: str, *, default: bool = False) -> bool:
    """Get a boolean environment variable.

    Accepts 1/0, true/false, yes/no and on/off (case-insensitive).

    Args:
        key: Environment variable name
        default: Value used when the variable is unset or empty

    Returns:
        Parsed boolean value

    Raises:
        ValueError: If the variable holds an unrecognised value
    """
    value = os.getenv(key)
    if not value:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    msg = f"{key} must be a boolean, got {value!r}"
    raise ValueError(msg)


def get_eth_rpc_url(rpc_url: str | None = None) -> str:
    """Get Ethereum RPC URL from parameter or environment.

    Args:
        rpc_url: Optional RPC URL to use directly

    Returns:
        Ethereum RPC URL

    Raises:
        ValueError: If RPC URL is not provided and ETH_RPC_URL env var is not set
    """
    if rpc_url:
        return rpc_url

    env_rpc_url = os.getenv("ETH_RPC_URL")
    if not env_rpc_url:
        msg = "ETH_RPC_URL must be provided or set in environment variables"
        raise ValueError(msg)

    return env_rpc_url


def get_eth_ws_url(ws_url: str | None = None) -> str:
    """Get Ethereum WebSocket URL from parameter or environment.

    Args:
        ws_url: Optional WebSocket URL to use directly

    Returns:
        Ethereum WebSocket URL

    Raises:
        ValueError: If WebSocket URL is not provided and ETH_WS_URL env var is not set
    """
    if ws_url:
        return ws_url

    env_ws_url = os.getenv("ETH_WS_URL")
    if not env_ws_url:
        msg = "ETH_WS_URL must be provided or set in environment variables"
        raise ValueError(msg)

    return env_ws_url


__all__ = [
    "get_bool_env",
    "get_eth_rpc_url",
    "get_eth_ws_url",
    "get_int_env",
    "get_optional_env",
    "get_required_env",
]
