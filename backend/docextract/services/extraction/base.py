from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PageText:
    page: int
    text: str


class DocumentExtractor(ABC):
    @abstractmethod
    def extract(self, file_path: Path) -> list[PageText]:
        """Extract text from the file, one entry per page in document order."""
        ...
