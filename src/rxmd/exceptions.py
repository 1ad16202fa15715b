#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the rxmd library.

This module defines the exception classes raised while registering
transforms, compiling their patterns and loading configuration. Errors
raised by user-supplied render functions are never wrapped; they reach the
caller of ``parse`` unchanged.

Exception Hierarchy
-------------------
- RxmdError (base exception)

  - ValidationError (missing or invalid transform fields, bad options)
    - ConfigurationError (unreadable or malformed configuration files)

  - PatternError (pattern compilation failures, unsupported flags)

"""

from typing import Any


class RxmdError(Exception):
    """Base exception class for all rxmd-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(RxmdError):
    """Exception raised for invalid transform definitions or options.

    This exception covers validation errors such as:
    - A transform definition without name, pattern or render function
    - A render function that is not callable
    - An unknown anchor transform in ``before``/``after`` placement
    - Invalid option values

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigurationError(ValidationError):
    """Exception raised when a configuration file cannot be used.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error with the file path."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class PatternError(RxmdError):
    """Exception raised when a transform pattern cannot be compiled.

    Raised synchronously, either from ``register`` or from the first
    ``parse`` that needs the pattern. The underlying ``re.error`` is kept in
    ``original_error``.

    Parameters
    ----------
    message : str
        Description of the compilation failure
    pattern : str, optional
        The pattern that failed to compile
    transform_name : str, optional
        Name of the transform owning the pattern
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        pattern: str | None = None,
        transform_name: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the pattern error with pattern details."""
        super().__init__(message, original_error=original_error)
        self.pattern = pattern
        self.transform_name = transform_name


__all__ = [
    "RxmdError",
    "ValidationError",
    "ConfigurationError",
    "PatternError",
]
