"""Logfire observability for the Lending Ledger."""

import functools
import inspect
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import logfire

from .config import LedgerConfig
from .errors import LedgerError

logger = logging.getLogger(__name__)


def initialize_observability(config: LedgerConfig) -> None:
    """Configure logfire from the ledger configuration."""
    if not config.logfire_enabled:
        logger.debug("Observability disabled via configuration")
        return

    logfire.configure(
        token=config.logfire_token,
        service_name=config.server_name,
        service_version=config.server_version,
        environment=config.environment,
        send_to_logfire=config.logfire_send,
        console=False,
    )
    # Route stdlib log records into the same traces
    logging.getLogger().addHandler(logfire.LogfireLoggingHandler())
    logger.info("Logfire tracing configured for %s", config.environment)


def trace_operation(operation: str):
    """Decorator to trace a synchronous ledger operation."""

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(self, caller: str, *args, **kwargs):
            bound = signature.bind(self, caller, *args, **kwargs)
            inputs = {
                name: value
                for name, value in bound.arguments.items()
                if name not in ("self", "caller")
            }
            with logfire.span(
                f"ledger.operation.{operation}",
                ledger_operation=operation,
                principal=caller,
            ) as span:
                _add_attributes(span, "input", inputs)
                try:
                    result = func(self, caller, *args, **kwargs)
                except LedgerError as e:
                    span.set_attribute("operation.success", False)
                    span.set_attribute("operation.error_code", e.code)
                    raise
                span.set_attribute("operation.success", True)
                return result

        return wrapper

    return decorator


def trace_tool(tool_name: str):
    """Decorator to trace MCP tool execution."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            with logfire.span(f"tool.execution.{tool_name}", tool_name=tool_name) as span:
                start_time = datetime.now()
                result = await func(*args, **kwargs)
                span.set_attribute("tool.success", not result.get("isError", False))
                span.set_attribute(
                    "tool.duration_ms", (datetime.now() - start_time).total_seconds() * 1000
                )
                return result

        return wrapper

    return decorator


def _add_attributes(span, prefix: str, data: dict[str, Any]):
    for key, value in data.items():
        if isinstance(value, str | int | float | bool):
            span.set_attribute(f"{prefix}.{key}", value)
