"""
Tabular Source Interfaces

A TableSource reads the three logical tables (settings, categories,
products) of one source; a SourceCatalog lists the sources available for
discovery.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import SourceRef, SourceTables


class TableSource(ABC):
    """Provider of settings, categories and product rows."""

    @abstractmethod
    def read(self, source_id: str) -> SourceTables:
        """
        Read one source.

        Raises:
            MissingRequiredFieldError: If name, company or url is missing from settings
            SourceReadError: If the source cannot be read
        """


class SourceCatalog(ABC):
    """Lists the sources accessible for discovery."""

    @abstractmethod
    def list(self) -> List[SourceRef]:
        """Return discoverable sources in a stable order."""
