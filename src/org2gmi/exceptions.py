#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the org2gmi library.

The rendering core never raises for node kinds it does not understand: those
are delegated to the fallback renderer or omitted. The exceptions below cover
the boundaries around it: invalid options, unreadable input, parser failures,
missing dependencies and output that cannot be written.

Exception Hierarchy
-------------------
- Org2GmiError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a parser or renderer)

  - FileError (file access and I/O)
    - SourceNotFoundError (input file doesn't exist)

  - ParsingError (Org text could not be turned into a document tree)

  - RenderingError (output generation failures)
    - OutputWriteError (file write failures)

  - DependencyError (missing optional packages)

"""

from typing import Any


class Org2GmiError(Exception):
    """Base exception class for all org2gmi-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Org2GmiError):
    """Exception raised for invalid input parameters or options.

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


class InvalidOptionsError(ValidationError):
    """Exception raised when a parser or renderer receives the wrong options class.

    Parameters
    ----------
    component_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The options class type that was received
    message : str, optional
        Custom error message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(Org2GmiError):
    """Base exception for file access and I/O errors.

    Attributes
    ----------
    file_path : str or None
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class SourceNotFoundError(FileError):
    """Exception raised when an input Org file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the not-found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(Org2GmiError):
    """Exception raised when Org input cannot be parsed into a document tree.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderingError(Org2GmiError):
    """Exception raised when output rendering fails."""

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when writing the rendered Gemini file fails.

    Attributes
    ----------
    file_path : str
        Path to the file that failed to write

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path


class DependencyError(Org2GmiError):
    """Exception raised when an optional package needed for a step is missing.

    Parameters
    ----------
    component_name : str
        Name of the component requiring the dependency
    missing_packages : list[tuple[str, str]]
        ``(package_name, version_spec)`` pairs for the missing packages
    original_import_error : ImportError, optional
        The ImportError raised when the package was imported

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            pkg_list = " ".join(f'"{name}{spec}"' if spec else name for name, spec in missing_packages)
            message = f"{component_name} requires the following packages: {pkg_list}\nInstall with: pip install {pkg_list}"
        super().__init__(message, original_error=original_import_error)
        self.component_name = component_name
        self.missing_packages = missing_packages
