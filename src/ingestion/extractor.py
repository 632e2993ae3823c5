"""Plain-text extraction from local files.

Supports text and Markdown, source code (prefixed with a small header naming
the file and language), HTML and PDF. Anything else raises ExtractionError.
"""

import io
import logging
import re
from pathlib import Path

from bs4 import BeautifulSoup
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from src.exceptions import ExtractionError

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 100_000

TEXT_EXTENSIONS = {"txt", "md", "rst", "json", "yaml", "yml", "toml"}
CODE_EXTENSIONS = {"py", "js", "ts", "rs", "java", "cpp", "c", "h", "go", "rb"}
HTML_EXTENSIONS = {"html", "htm"}
PDF_EXTENSIONS = {"pdf"}

SUPPORTED_EXTENSIONS = TEXT_EXTENSIONS | CODE_EXTENSIONS | HTML_EXTENSIONS | PDF_EXTENSIONS


def extract_text(file_path: str | Path) -> str:
    """Extract UTF-8 text from a file, truncated to MAX_CONTENT_CHARS.

    Raises:
        ExtractionError: If the file is missing, unreadable, or of an
            unsupported type.
    """
    path = Path(file_path)
    if not path.is_file():
        raise ExtractionError(f"File not found: {file_path}")

    extension = path.suffix.lower().lstrip(".")

    if extension in TEXT_EXTENSIONS:
        content = _read_text(path)
    elif extension in CODE_EXTENSIONS:
        content = f"File: {path.name}\nLanguage: {extension}\n\n{_read_text(path)}"
    elif extension in HTML_EXTENSIONS:
        content = html_to_text(_read_text(path))
    elif extension in PDF_EXTENSIONS:
        content = _extract_pdf(path)
    else:
        raise ExtractionError(f"Unsupported file type: {extension or path.name}")

    return truncate_content(content)


def truncate_content(content: str, max_chars: int = MAX_CONTENT_CHARS) -> str:
    """Cut content down to max_chars characters, marking the cut."""
    if len(content) <= max_chars:
        return content
    return (
        f"{content[:max_chars]}...\n\n"
        f"[Content truncated - showing first {max_chars} characters]"
    )


def html_to_text(html: str) -> str:
    """Strip markup from an HTML page, keeping one line per text block.

    Script and style contents are dropped, lines are trimmed, and blank
    lines are removed.
    """
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(["script", "style", "noscript"]):
        tag.decompose()

    text = soup.get_text(separator="\n")
    text = re.sub(r"[ \t]+", " ", text)

    lines = (line.strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ExtractionError(f"File is not valid UTF-8 text: {path.name}") from e
    except OSError as e:
        raise ExtractionError(f"Failed to read {path.name}: {e}") from e


def _extract_pdf(path: Path) -> str:
    try:
        reader = PdfReader(io.BytesIO(path.read_bytes()))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (OSError, PdfReadError) as e:
        raise ExtractionError(f"PDF extraction error: {e}") from e

    logger.debug("Extracted %d pages from %s", len(pages), path.name)
    return "\n\n".join(pages)
