"""Centralized error handling for adapter and helper calls."""
from typing import Callable, Any
from localfind.utils.logging import log_error


def safe_execute(func: Callable, *args, default_return: Any = None, **kwargs) -> Any:
    """
    Safely execute a function and return default value on error.

    Only data errors (bad keys, types or values in source rows) are caught;
    anything else propagates.

    Args:
        func: Function to execute
        *args: Positional arguments
        default_return: Value to return on error
        **kwargs: Keyword arguments

    Returns:
        Function result or default_return on error
    """
    try:
        return func(*args, **kwargs)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        log_error(e, {
            "module": getattr(func, "__module__", "unknown"),
            "function": getattr(func, "__name__", "unknown"),
            "safe_execute": True,
        })
        return default_return
