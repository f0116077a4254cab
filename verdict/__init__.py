"""
Constraint-validation execution engine.

Validation functions take the session context as their first argument and
declare constraints over a value; the engine tracks where each failure
occurred, collects or stops at failures depending on configuration, and
skips back-references in cyclic object graphs.
"""

from __future__ import annotations

from .accumulate import Accumulated, Err, Ok
from .alternation import Alternation, or_
from .capture import capture
from .config import ValidationConfig, config_from_mapping, load_config
from .constraint import Constraint, constrain, evaluate, reject, with_message
from .elements import each, each_key, each_value
from .errors import DeferredValueError, ScopeError, ValidationError
from .factory import Bound, FactoryScope, create, factory, try_create
from .log import LogEntry, Satisfied, Violated, logging_sink
from .message import Message, leaf_count, text
from .path import Path
from .report import messages_to_json, print_failure, render_messages
from .result import Failure, Success, ValidationResult
from .schema import Schema, named, schema
from .validation import Validation, raise_messages, try_validate, validate

__all__ = [
    # Context and runs
    "Validation",
    "ValidationConfig",
    "config_from_mapping",
    "load_config",
    "try_validate",
    "validate",
    "raise_messages",
    # Results
    "Success",
    "Failure",
    "ValidationResult",
    "Ok",
    "Err",
    "Accumulated",
    # Messages and paths
    "Message",
    "Path",
    "text",
    "leaf_count",
    # Constraints and scopes
    "Constraint",
    "constrain",
    "evaluate",
    "reject",
    "with_message",
    "Schema",
    "schema",
    "named",
    "capture",
    "Alternation",
    "or_",
    "each",
    "each_key",
    "each_value",
    # Factory
    "Bound",
    "FactoryScope",
    "factory",
    "try_create",
    "create",
    # Logging and reporting
    "LogEntry",
    "Satisfied",
    "Violated",
    "logging_sink",
    "render_messages",
    "print_failure",
    "messages_to_json",
    # Errors
    "ValidationError",
    "DeferredValueError",
    "ScopeError",
]
