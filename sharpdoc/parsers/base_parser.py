"""Abstract base class for language parsers."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..models.syntax_tree import SourceTree


class BaseParser(ABC):
    """
    Abstract base class defining the interface for language-specific parsers.

    All parser implementations must inherit from this class and implement
    the parse method to turn source text into a full-fidelity SourceTree.
    """

    @abstractmethod
    def parse(self, text: str) -> SourceTree:
        """
        Parse source text into a syntax tree.

        Parameters
        ----------
        text : str
            Complete source document

        Returns
        -------
        SourceTree
            Tree whose ``to_full_string()`` reproduces ``text`` exactly

        Raises
        ------
        SyntaxError
            If the text contains syntax errors that prevent parsing
        """
        pass

    def parse_file(self, filepath: str) -> SourceTree:
        """
        Read and parse a source file.

        Parameters
        ----------
        filepath : str
            Path to the source file

        Raises
        ------
        FileNotFoundError
            If the specified file does not exist
        SyntaxError
            If the file contains syntax errors
        """
        path = Path(filepath)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {filepath}")
        with path.open(encoding="utf-8", newline="") as f:
            text = f.read()
        try:
            return self.parse(text)
        except SyntaxError as e:
            raise SyntaxError(f"Syntax error in {filepath}: {e}") from e
