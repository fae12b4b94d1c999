#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exceptions raised by adocast.

Converting a document never fails because of its content: an element whose
text cannot be located is logged and left out of the tree. Errors are only
raised at the edges, when options are of the wrong kind, an input file
cannot be read or a configuration file is unusable.

Exception Hierarchy
-------------------
- AdocAstError
  - ValidationError: a parameter or option value is rejected
    - InvalidOptionsError: the converter got something other than ConverterOptions
  - FileError: an input file problem
    - FileNotFoundError
    - FileAccessError: unreadable file or non-UTF-8 content
  - ConfigError: a configuration file or mapping is malformed or has unknown keys

"""

from typing import Any


class AdocAstError(Exception):
    """Root of the adocast exception hierarchy.

    Parameters
    ----------
    message : str
        Text shown to the user
    original_error : Exception or None, default = None
        Lower-level exception this error was raised from

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Store the message and the wrapped exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(AdocAstError):
    """A parameter was given a value adocast cannot use.

    ``parameter_name`` and ``parameter_value`` identify the rejected input
    when the caller knows them.
    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Record the offending parameter alongside the message."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Options of the wrong class were passed to a converter.

    Parameters
    ----------
    converter_name : str
        Converter that rejected the options, e.g. ``"asciidoc"``
    expected_type : type
        Options class the converter accepts
    received_type : type
        Class of the object actually passed
    message : str or None, default = None
        Replaces the generated message
    original_error : Exception or None, default = None
        Lower-level exception this error was raised from

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Build the message from the expected and received classes."""
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type
        super().__init__(
            message or f"{converter_name} converter needs {expected_type.__name__}, got {received_type.__name__}",
            parameter_name="options",
            parameter_value=received_type,
            original_error=original_error,
        )


class FileError(AdocAstError):
    """An input file could not be used.

    Parameters
    ----------
    message : str
        Text shown to the user
    file_path : str or None, default = None
        Path of the input as given on the command line
    original_error : Exception or None, default = None
        Lower-level exception this error was raised from

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Store the path of the failing input."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """The input path does not exist."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Default the message to ``File not found: <path>``."""
        super().__init__(message or f"File not found: {file_path}", file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """The input exists but cannot be read as UTF-8 text."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Default the message to ``Cannot read file: <path>``."""
        super().__init__(message or f"Cannot read file: {file_path}", file_path=file_path, original_error=original_error)


class ConfigError(AdocAstError):
    """Configuration could not be turned into converter options.

    Raised for unreadable or unparsable config files, settings that are not
    tables where a table is expected, unknown keys and invalid values.
    ``config_path`` names the file when the configuration came from one.
    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Store the path of the configuration source."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path
