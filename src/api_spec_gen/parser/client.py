"""HTTP client scanner.

Extracts call descriptors from a TypeScript client whose methods are
documented like this::

    /**
     * Gets the site, and your user data.
     *
     * `HTTP.GET /site`
     */
    getSite(form: GetSite = {}) {
      return this.#wrapper<GetSite, GetSiteResponse>(
        HttpType.Get,
        "/site",
        form,
      );
    }

Functions that do not follow the convention are skipped.
"""

import logging
import re
from pathlib import Path

from .base import HTTP_METHODS, CallDescriptor

logger = logging.getLogger(__name__)

CALL_RE = re.compile(
    r"""
    /\*\*[ \t]*\r?\n
    [ \t]*\*[ \t]+(?P<description>[^\n]+?)[ \t]*\r?\n     # first comment line
    (?:(?!\*/).)*?
    `HTTP\.(?P<method>[A-Za-z]+)[ \t]+(?P<path>[^`\s]+)[ \t]*`
    (?:(?!\*/).)*?
    \*/\s*
    (?:async\s+)?
    (?P<function>\w+)\s*\(\s*
    (?:\w+\??|\{[^}]*\})\s*:\s*(?P<request>\w+)             # form parameter, named or destructured
    (?:\s*=\s*\{\s*\})?\s*[,)]
    (?:(?!/\*\*).)*?                                      # stay inside this function
    <\s*\w+\s*,\s*(?P<response>\w+)\s*>
    """,
    re.VERBOSE | re.DOTALL,
)

ANNOTATION_RE = re.compile(r"`HTTP\.(\w+)[ \t]+([^`\s]+)[ \t]*`")

TAG_ALIASES = {"modlog": "mod"}


def derive_tag(path: str) -> str:
    """Build an operation tag from the first path segment.

    >>> derive_tag("/private_message/list")
    'Private Message'
    """
    segments = path.split("/")
    tag = segments[1] if len(segments) > 1 else segments[0]
    tag = TAG_ALIASES.get(tag, tag)
    return " ".join(word[:1].upper() + word[1:] for word in tag.split("_") if word)


def _scan_region(text: str) -> str:
    """Methods live after the constructor; clients without one are scanned whole."""
    if "constructor(" in text:
        return text.split("constructor(", 1)[1]
    return text


def scan_client(text: str) -> list[CallDescriptor]:
    """Extract one CallDescriptor per annotated client function."""
    region = _scan_region(text)
    calls: list[CallDescriptor] = []

    for match in CALL_RE.finditer(region):
        method = match.group("method").strip().upper()
        if method not in HTTP_METHODS:
            logger.debug("Skipping %s: unknown HTTP method %s", match.group("function"), method)
            continue

        calls.append(
            CallDescriptor(
                description=match.group("description").strip(),
                method=method,
                path=match.group("path").strip(),
                function_name=match.group("function").strip(),
                request_schema=match.group("request").strip(),
                response_schema=match.group("response").strip(),
            )
        )

    _log_skipped(region, calls)
    return calls


def _log_skipped(region: str, calls: list[CallDescriptor]) -> None:
    found = {(c.method, c.path) for c in calls}
    for method, path in ANNOTATION_RE.findall(region):
        if (method.upper(), path) not in found:
            logger.debug("Skipping annotation HTTP.%s %s: function does not match", method, path)


def read_client(file_path: Path) -> list[CallDescriptor]:
    """Read and scan an HTTP client source file."""
    text = file_path.read_text(encoding="utf-8")
    calls = scan_client(text)
    logger.info("Found %d annotated calls in %s", len(calls), file_path)
    return calls
