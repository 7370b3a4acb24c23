"""File text extractors and the registry mapping extensions to them."""

from __future__ import annotations

import re
from pathlib import Path

import pymupdf4llm
from bs4 import BeautifulSoup
from charset_normalizer import from_path
from docx import Document as DocxDocument

from kb_assistant.exceptions import ParsingError
from kb_assistant.protocols.extraction import TextExtractor


class PlainTextExtractor:
    @property
    def supported_extensions(self) -> list[str]:
        return [".txt"]

    def extract(self, file_path: str | Path) -> str:
        file_path = Path(file_path)
        best = from_path(file_path).best()
        return str(best) if best else file_path.read_text(encoding="utf-8", errors="replace")


class MarkdownExtractor:
    @property
    def supported_extensions(self) -> list[str]:
        return [".md", ".markdown"]

    def extract(self, file_path: str | Path) -> str:
        text = Path(file_path).read_text(encoding="utf-8")
        # Strip YAML front matter if present
        return re.sub(r"^---\s*\n.*?\n---\s*\n", "", text, count=1, flags=re.DOTALL)


class HTMLExtractor:
    @property
    def supported_extensions(self) -> list[str]:
        return [".html", ".htm"]

    def extract(self, file_path: str | Path) -> str:
        html = Path(file_path).read_text(encoding="utf-8")
        soup = BeautifulSoup(html, "html.parser")

        for tag in soup.find_all(["script", "style", "nav", "footer"]):
            tag.decompose()

        # One paragraph per block element, bullets kept as "- item"
        blocks: list[str] = []
        for element in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6", "p", "li", "td"]):
            text = element.get_text(" ", strip=True)
            if not text:
                continue
            blocks.append(f"- {text}" if element.name == "li" else text)
        return "\n\n".join(blocks)


class PDFExtractor:
    @property
    def supported_extensions(self) -> list[str]:
        return [".pdf"]

    def extract(self, file_path: str | Path) -> str:
        return pymupdf4llm.to_markdown(str(file_path))


class DocxExtractor:
    @property
    def supported_extensions(self) -> list[str]:
        return [".docx"]

    def extract(self, file_path: str | Path) -> str:
        docx = DocxDocument(str(file_path))
        blocks = [p.text.strip() for p in docx.paragraphs if p.text.strip()]
        # Table rows become one pipe-joined line each
        for table in docx.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    blocks.append(" | ".join(cells))
        return "\n\n".join(blocks)


class ExtractorRegistry:
    def __init__(self) -> None:
        self._extractors: dict[str, TextExtractor] = {}

    def register(self, extension: str, extractor: TextExtractor) -> None:
        self._extractors[extension.lower()] = extractor

    def get_extractor(self, filename: str) -> TextExtractor:
        ext = Path(filename).suffix.lower()
        extractor = self._extractors.get(ext)
        if extractor is None:
            raise ParsingError(
                f"No extractor registered for extension '{ext}'. "
                f"Supported: {self.supported_types()}"
            )
        return extractor

    def supported_types(self) -> list[str]:
        return list(self._extractors.keys())


def create_default_registry() -> ExtractorRegistry:
    """Create a registry with all built-in extractors."""
    registry = ExtractorRegistry()
    extractors: list[TextExtractor] = [
        PlainTextExtractor(),
        MarkdownExtractor(),
        HTMLExtractor(),
        PDFExtractor(),
        DocxExtractor(),
    ]
    for extractor in extractors:
        for ext in extractor.supported_extensions:
            registry.register(ext, extractor)
    return registry
