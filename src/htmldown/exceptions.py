#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the htmldown library.

This module defines specialized exception classes for the error conditions
that can occur while reading, parsing and converting an HTML document.

Exception Hierarchy
-------------------
- HtmldownError (base exception)

  - ValidationError (option and extension rule validation)

  - ParsingError (input reading and HTML parsing failures)

  - RenderingError (traversal failures, e.g. excessive nesting)

  - DependencyError (missing parser backend packages)

"""

from typing import Any


class HtmldownError(Exception):
    """Base exception class for all htmldown-specific errors.

    Catching this will catch all library-specific errors.

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


class ValidationError(HtmldownError):
    """Exception raised for invalid options or extension rules.

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


class ParsingError(HtmldownError):
    """Exception raised when the input cannot be read or parsed.

    This is the single fatal condition of a conversion: nothing has been
    written to the output sink when it is raised.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        ``"input_reading"`` or ``"html_parsing"``
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(HtmldownError):
    """Exception raised when the document tree cannot be converted.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class DependencyError(HtmldownError):
    """Exception raised when a required parser backend is not available.

    Parameters
    ----------
    message : str
        Description of the problem
    missing_packages : list[str], optional
        Distribution names that need to be installed
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        missing_packages: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        missing_packages = missing_packages or []
        if missing_packages:
            message += f"\nInstall with: pip install {' '.join(missing_packages)}"
        super().__init__(message, original_error)
        self.missing_packages = missing_packages
