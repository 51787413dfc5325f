"""
Structured diagnostics produced while resolving a node.

Resolvers never log directly. They record :class:`Diagnostic` entries in a
:class:`Diagnostics` collector owned by the caller, which decides whether and
where to emit them (see :meth:`Diagnostics.emit`).

Example usage:
    .. code-block:: python

        from esoperator.diagnostics import Diagnostics
        from esoperator.logger import logger

        diagnostics = Diagnostics()
        resources = ResourceResolver().resolve(descriptor, diagnostics)
        diagnostics.emit(logger)
"""

import logging
from typing import Iterator, List, Literal
from pydantic import BaseModel, ConfigDict, Field


_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class Diagnostic(BaseModel):
    """ A single diagnostic record attached to a node. """
    level: Literal["info", "warning", "error"] = Field(..., description="Severity of the diagnostic.")
    node: str = Field(..., description="Deployment name of the node the diagnostic refers to.")
    message: str = Field(..., description="Human readable message.")

    model_config = ConfigDict(frozen=True)


class Diagnostics:
    """ Ordered collector of diagnostics for one resolution pass. """

    def __init__(self) -> None:
        self._records: List[Diagnostic] = []

    def info(self, node: str, message: str) -> None:
        self._records.append(Diagnostic(level="info", node=node, message=message))

    def warning(self, node: str, message: str) -> None:
        self._records.append(Diagnostic(level="warning", node=node, message=message))

    def error(self, node: str, message: str) -> None:
        self._records.append(Diagnostic(level="error", node=node, message=message))

    @property
    def records(self) -> List[Diagnostic]:
        """ Copy of the collected diagnostics, in recording order. """
        return list(self._records)

    def has_errors(self) -> bool:
        return any(record.level == "error" for record in self._records)

    def emit(self, logger: logging.Logger) -> None:
        """
        Forward all collected diagnostics to a logger.

        Args:
            logger (logging.Logger): Logger receiving the records.
        """
        for record in self._records:
            logger.log(_LEVELS[record.level], record.message)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
