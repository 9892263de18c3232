# ============================================================================
# CLAUDE CONTEXT - LOGGING
# ============================================================================
# STATUS: Core Infrastructure - Structured logging
# PURPOSE: JSON-only structured logging for Azure Functions with Application Insights
# EXPORTS: ComponentType, LogLevel, LogContext, LoggerFactory, JSONFormatter, log_exceptions
# INTERFACES: Dataclass context, enums, factory, JSON formatter, exception decorator
# DEPENDENCIES: enum, dataclasses, typing, datetime, logging, json, traceback (stdlib only!)
# SCOPE: Every trigger, service and upstream adapter logs through this module
# PATTERNS: JSON-only output, Azure Functions integration, Exception decorator pattern
# ENTRY_POINTS: LoggerFactory.create_logger(), @log_exceptions decorator
# ============================================================================

"""
Structured Logger

JSON-formatted loggers for the advisory service. Each logger is tagged with
the architectural layer it belongs to so Application Insights queries can
slice by trigger / service / adapter.

Design Principles:
- Strong typing with dataclasses (stdlib only)
- Enum safety for categories
- Component-specific loggers
- No external dependencies

Usage:
    from util_logger import LoggerFactory, ComponentType

    logger = LoggerFactory.create_logger(ComponentType.SERVICE, "AdvisoryService")
    logger.info("Aggregated feeds", extra={'custom_dimensions': {'features': 12}})
"""

import os
import sys
import json
import inspect
import logging
import traceback
from enum import Enum
from functools import wraps
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Dict, Any


# ============================================================================
# COMPONENT TYPES
# ============================================================================

class ComponentType(Enum):
    """
    Component types aligned with the service layers.

    NO "UTIL" or other non-architectural types.
    """
    TRIGGER = "trigger"        # HTTP entry points
    SERVICE = "service"        # Aggregation / business logic
    ADAPTER = "adapter"        # Upstream HTTP clients
    HEALTH = "health"          # Health checks


# ============================================================================
# LOG LEVELS
# ============================================================================

class LogLevel(Enum):
    """Standard Python log levels as enum for type safety."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_python_level(self) -> int:
        """Convert to Python logging level constant."""
        return getattr(logging, self.value)


def _default_level() -> LogLevel:
    if os.getenv('DEBUG_LOGGING', '').lower() == 'true':
        return LogLevel.DEBUG
    return LogLevel.INFO


# ============================================================================
# LOG CONTEXT - Correlation
# ============================================================================

@dataclass
class LogContext:
    """
    Context attached to every record emitted by a logger.

    Invocation IDs come from the Functions host; feed names let a single
    upstream failure be traced back to the fetch plan entry.
    """
    invocation_id: Optional[str] = None
    request_id: Optional[str] = None
    feed: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, dropping unset fields."""
        return {
            k: v for k, v in {
                'invocation_id': self.invocation_id,
                'request_id': self.request_id,
                'feed': self.feed
            }.items() if v is not None
        }


# ============================================================================
# JSON FORMATTER
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging in Azure Functions.
    Outputs logs in a format that Application Insights can automatically parse.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Application Insights reads customDimensions
        if hasattr(record, 'custom_dimensions'):
            log_obj['customDimensions'] = record.custom_dimensions

        if record.exc_info:
            log_obj['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info)
            }

        return json.dumps(log_obj, default=str)


# ============================================================================
# LOGGER FACTORY
# ============================================================================

class LoggerFactory:
    """
    Factory for creating component-specific loggers.

    Example:
        logger = LoggerFactory.create_logger(
            ComponentType.TRIGGER,
            "AdvisoryQueryTrigger"
        )
        logger.info("Processing request")
    """

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        context: Optional[LogContext] = None,
        level: Optional[LogLevel] = None
    ) -> logging.Logger:
        """
        Create a logger for a specific component.

        Args:
            component_type: Type of component
            name: Component name (e.g., "AdvisoryService")
            context: Optional log context for correlation
            level: Optional level override (defaults to DEBUG_LOGGING env)

        Returns:
            Configured Python logger
        """
        log_level = (level or _default_level()).to_python_level()

        logger = logging.getLogger(f"{component_type.value}.{name}")
        logger.setLevel(log_level)

        # Avoid duplicate handlers when the same component is created twice
        logger.handlers.clear()

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)

        # Azure's root logger forwards to Application Insights
        logger.propagate = True

        original_log = logger._log

        def log_with_context(level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=1):
            """Wrapper to inject context as custom dimensions."""
            if extra is None:
                extra = {}

            custom_dims = context.to_dict() if context else {}
            custom_dims['component_type'] = component_type.value
            custom_dims['component_name'] = name

            if 'custom_dimensions' in extra:
                custom_dims.update(extra['custom_dimensions'])

            extra['custom_dimensions'] = custom_dims

            original_log(level, msg, args, exc_info=exc_info, extra=extra,
                         stack_info=stack_info, stacklevel=stacklevel)

        logger._log = log_with_context

        return logger


# ============================================================================
# EXCEPTION DECORATOR
# ============================================================================

def log_exceptions(component_type: Optional[ComponentType] = None,
                   component_name: Optional[str] = None,
                   logger: Optional[logging.Logger] = None):
    """
    Decorator to log exceptions with full context before re-raising.

    Works on both plain and ``async def`` functions.

    Example:
        @log_exceptions(ComponentType.SERVICE, "AdvisoryService")
        async def aggregate(self):
            ...
    """
    def _resolve_logger(func) -> logging.Logger:
        if logger:
            return logger
        if component_type and component_name:
            return LoggerFactory.create_logger(component_type, component_name)
        return LoggerFactory.create_logger(ComponentType.SERVICE, func.__module__ or "unknown")

    def _log_failure(log: logging.Logger, func, e: Exception, args, kwargs):
        log.error(
            f"Exception in {func.__name__}",
            exc_info=True,
            extra={
                'custom_dimensions': {
                    'function_name': func.__name__,
                    'function_module': func.__module__,
                    'exception_type': type(e).__name__,
                    'exception_message': str(e),
                    'function_args': str(args)[:500],
                    'function_kwargs': str(kwargs)[:500],
                    'traceback': traceback.format_exc()
                }
            }
        )

    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    _log_failure(_resolve_logger(func), func, e, args, kwargs)
                    raise
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log_failure(_resolve_logger(func), func, e, args, kwargs)
                raise
        return wrapper
    return decorator
