"""TypeScript type-declaration normalizer.

Each generated type file starts with a provenance comment line and a
block of imports. Both are dropped and the remaining declarations are
concatenated into one compilation unit for the converter.
"""

import logging
import re
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

# `import type { A } from "./A";` (also multi-line) and `import "./side-effect";`
IMPORT_RE = re.compile(
    r"""^[ \t]*import\b(?:[^;]*?\bfrom\b[^;]*|[ \t]+["'][^"'\n]*["'][ \t]*);[ \t]*\r?\n?""",
    re.MULTILINE,
)


def normalize_unit(text: str) -> str:
    """Drop the first line and every import statement from one source unit."""
    _, _, body = text.partition("\n")
    return IMPORT_RE.sub("", body)


def combine_units(texts: Iterable[str]) -> str:
    """Normalize each unit and concatenate them into a single buffer."""
    parts = []
    for text in texts:
        body = normalize_unit(text)
        if body and not body.endswith("\n"):
            body += "\n"
        parts.append(body)
    return "".join(parts)


def read_type_sources(types_dir: Path) -> list[str]:
    """Read every .ts file in a directory, ordered by file name."""
    files = sorted(p for p in types_dir.iterdir() if p.is_file() and p.suffix == ".ts")
    logger.info("Reading %d type files from %s", len(files), types_dir)
    return [p.read_text(encoding="utf-8") for p in files]
