"""Plain-text summaries of markdown bodies."""

import re

import markdown
from bs4 import BeautifulSoup

SUMMARY_LENGTH = 100
ELLIPSIS = "..."

_WHITESPACE = re.compile(r"\s+")


def markdown_to_text(body: str) -> str:
    """Flatten markdown to its text content, dropping all markup."""
    html = markdown.markdown(body)
    return BeautifulSoup(html, "html.parser").get_text()


def summarize(body: str, length: int = SUMMARY_LENGTH) -> str:
    """Build a one-line summary from the first ``length`` characters of a body.

    Whitespace runs collapse to single spaces. The ellipsis is appended only
    when text was actually cut off.
    """
    text = _WHITESPACE.sub(" ", markdown_to_text(body)).strip()
    if len(text) <= length:
        return text
    return text[:length] + ELLIPSIS
