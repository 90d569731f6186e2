"""
Base extractor class for all sheet section extractors
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, List

from ..config.schema import Grid
from ..core.locator import cell
from ..core.utils import parse_number

logger = logging.getLogger(__name__)

class SectionExtractor(ABC):
    """Abstract base class for extractors that read one table out of a grid"""

    section_name = "section"

    @abstractmethod
    def extract(self, grid: Grid) -> Any:
        """
        Extract the section totals from a parsed grid

        Must never raise for messy data: a missing header yields empty totals.
        """
        pass

    @staticmethod
    def number_at(row: List[str], col: int):
        """Parse the cell at col, tolerating short rows and missing columns"""
        if col < 0:
            return None
        return parse_number(cell(row, col))

    @staticmethod
    def text_at(row: List[str], col: int) -> str:
        if col < 0:
            return ""
        return cell(row, col).strip()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(section={self.section_name!r})"
