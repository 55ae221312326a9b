"""Review documents read from a local directory."""

from pathlib import Path

from review_citations.core import Document, DocumentSource, ReviewSourceError


class ReviewDirectorySource(DocumentSource):
    """Read markdown reviews from a directory, sorted by filename."""

    emoji = "📝"
    name = "Review directory"

    def __init__(self, reviews_dir: Path, extension: str = ".md") -> None:
        self.reviews_dir = reviews_dir
        self.extension = extension

    def load_documents(self) -> list[Document]:
        """Read all review documents.

        A missing or unreadable directory is fatal.
        """
        if not self.reviews_dir.is_dir():
            raise ReviewSourceError(f"Reviews directory not found: {self.reviews_dir}")

        try:
            paths = sorted(
                p for p in self.reviews_dir.iterdir()
                if p.is_file() and p.name.endswith(self.extension)
            )
            return [
                Document(filename=path.name, content=path.read_text(encoding="utf-8"))
                for path in paths
            ]
        except (OSError, UnicodeDecodeError) as e:
            raise ReviewSourceError(f"Cannot read reviews from {self.reviews_dir}: {e}") from e
