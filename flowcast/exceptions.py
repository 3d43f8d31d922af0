"""
Custom exceptions for Flowcast.

Purpose
-------
Provides a unified exception hierarchy for the layers that surround the
projection engine (record loading, configuration, command line). The engine
functions themselves never raise for well-typed input: they degrade to zero
or empty contributions instead.

Exception Hierarchy
-------------------
FlowcastError (base)
├── ConfigurationError - Invalid settings or command-line parameters
└── ValidationError - Record data validation failures
    └── PayloadError - Unreadable or wrongly shaped payloads/files

Usage
-----
>>> from flowcast.exceptions import FlowcastError, PayloadError
>>>
>>> try:
...     records = load_records(path)
... except FlowcastError as e:
...     print(f"Flowcast error: {e}")
"""


class FlowcastError(Exception):
    """
    Base exception for all Flowcast errors.

    Examples
    --------
    >>> try:
    ...     records = records_from_payload(payload)
    ... except FlowcastError as e:
    ...     logger.error(f"Could not load records: {e}")
    """
    pass


class ConfigurationError(FlowcastError):
    """
    Invalid configuration or parameters.

    Raised when settings are invalid, such as:
    - Unknown aggregation period kind
    - Horizon outside the supported range
    - Malformed reference date on the command line

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "period must be one of week, month, quarter, year (got 'decade')."
    ... )
    """
    pass


class ValidationError(FlowcastError):
    """
    Record data validation failures.

    Raised when a recurring record violates its invariants:
    - day_of_period outside 1..31
    - month_of_period outside 1..12

    Examples
    --------
    >>> raise ValidationError(
    ...     f"day_of_period must be in 1..31 (got {day}) for record {record_id}."
    ... )
    """
    pass


class PayloadError(ValidationError):
    """
    Unreadable or wrongly shaped payloads.

    Raised by the loaders when a JSON file cannot be parsed or when the
    payload is neither a list of records nor a ``{"data": [...]}`` envelope.

    Examples
    --------
    >>> raise PayloadError(
    ...     "Expected a list of records or a {'data': [...]} envelope, got str."
    ... )
    """
    pass
