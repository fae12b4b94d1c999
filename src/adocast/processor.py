#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adocast/processor.py
"""Plugin boundary for linting hosts.

A linting host asks a processor which file extensions it handles, then runs
each matching file through ``pre_process`` to obtain the AST it lints, and
through ``post_process`` to attach the file path to the messages it produced.

Examples
--------
    >>> processor = AsciiDocProcessor().processor(".adoc")
    >>> doc = processor.pre_process("= Title", "README.adoc")
    >>> processor.post_process([], None)
    {'messages': [], 'filePath': '<asciidoc>'}

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from adocast.ast.nodes import Document
from adocast.constants import ASCIIDOC_EXTENSIONS, DEFAULT_FILE_PATH_PLACEHOLDER
from adocast.converter import parse
from adocast.options.asciidoc import ConverterOptions, options_from_dict

logger = logging.getLogger(__name__)


class AsciiDocFileProcessor:
    """Per-extension pre/post processing pair handed to the host."""

    def __init__(self, extension: str, options: ConverterOptions):
        """Bind the processor to an extension and conversion options."""
        self.extension = extension
        self.options = options

    def pre_process(self, text: str, file_path: Optional[str] = None) -> Document:
        """Convert the file text into a spanned AST.

        Parameters
        ----------
        text : str
            File content
        file_path : str or None, default = None
            Path of the file, used for logging only

        Returns
        -------
        Document
            The converted document, or the empty-document sentinel

        """
        logger.debug(f"Converting {file_path or DEFAULT_FILE_PATH_PLACEHOLDER}")
        return parse(text, self.options)

    def post_process(self, messages: list[Any], file_path: Optional[str] = None) -> dict[str, Any]:
        """Attach the file path to the host's lint messages.

        A missing or empty path is replaced with ``"<asciidoc>"``.
        """
        return {"messages": messages, "filePath": file_path or DEFAULT_FILE_PATH_PLACEHOLDER}


class AsciiDocProcessor:
    """AsciiDoc processor plugin.

    Parameters
    ----------
    config : ConverterOptions, mapping or None, default = None
        Conversion options, or a configuration mapping in the shape accepted
        by ``options_from_dict``

    Raises
    ------
    ConfigError
        If ``config`` is a mapping with unknown or invalid settings

    """

    def __init__(self, config: Union[ConverterOptions, Mapping[str, Any], None] = None):
        """Store the configuration and resolve it to converter options."""
        self.config = config
        if isinstance(config, ConverterOptions):
            self.options = config
        else:
            self.options = options_from_dict(config or {})

    @staticmethod
    def available_extensions() -> tuple[str, ...]:
        """Return the file extensions this processor handles."""
        return ASCIIDOC_EXTENSIONS

    def processor(self, ext: str) -> AsciiDocFileProcessor:
        """Return the pre/post processing pair for files with extension ``ext``."""
        return AsciiDocFileProcessor(ext, self.options)
