"""
Music library domain models.

Contains data structures for representing playlist tracks.
"""

from pathlib import Path
from typing import NamedTuple, Union


class Track(NamedTuple):
    """A playable file plus the title shown for it.

    The title is the base file name, so two files with the same name in
    different directories display identically.
    """

    file_path: str
    title: str

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Track":
        """Build a Track, deriving the title from the file name."""
        path = Path(path)
        return cls(file_path=str(path), title=path.name)
