"""
Decorators for automatic logging of git operations.

These decorators enable traceability without cluttering operation logic.
"""

import functools
import inspect
from datetime import datetime
from typing import Any, Callable

from .logger import get_gitsim_logger, log_operation


def track_operation(operation_type: str) -> Callable:
    """
    Decorator to track a git operation and its outcome.

    Aborted results are logged as warnings with their error text, successful
    ones at info level with their explanation tag. Exceptions are logged and
    re-raised.

    Args:
        operation_type: Operation name (e.g., "commit", "rebase")

    Example:
        >>> @track_operation("commit")
        ... def commit(self, message=None):
        ...     return self.state_manager.mutate(...)
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = get_gitsim_logger("operations")

            sig = inspect.signature(func)
            bound_args = sig.bind(*args, **kwargs)
            bound_args.apply_defaults()

            operation_id = datetime.utcnow().timestamp()
            log_operation(
                log,
                operation=operation_type,
                operation_id=operation_id,
                arguments={
                    k: str(v)[:100]
                    for k, v in bound_args.arguments.items()
                    if k != "self"
                },
            )

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"Operation {operation_type} failed: {e}",
                    operation=operation_type,
                    operation_id=operation_id,
                    error_type=type(e).__name__,
                )
                raise

            if getattr(result, "abort", False):
                log.warning(
                    f"Operation {operation_type} aborted: {result.error}",
                    operation=operation_type,
                    operation_id=operation_id,
                )
            else:
                log.info(
                    f"Operation {operation_type} completed",
                    operation=operation_type,
                    operation_id=operation_id,
                    explanation=getattr(result, "explanation", None),
                )

            return result

        return wrapper

    return decorator
