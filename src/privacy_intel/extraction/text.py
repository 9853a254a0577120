"""
Markup-to-text helpers shared by the extractors.
"""

from bs4 import BeautifulSoup, Comment

NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]


def parse_html(markup: str) -> BeautifulSoup:
    """Parse markup with the stdlib-backed parser; tolerant of broken HTML."""
    return BeautifulSoup(markup or "", "html.parser")


def soup_to_text(soup: BeautifulSoup) -> str:
    """
    Plain text of a parsed document.

    Scripts, styles and comments are dropped in place; text nodes are
    joined with single spaces so adjacent elements don't run together.
    """
    for element in soup(NON_CONTENT_TAGS):
        element.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    text = soup.get_text(separator=" ", strip=True)
    return " ".join(text.split())


def html_to_text(markup: str) -> str:
    """Plain text of an HTML string; empty input gives ""."""
    if not markup:
        return ""
    return soup_to_text(parse_html(markup))


def element_text(element) -> str:
    """Whitespace-normalized text of a single element."""
    return " ".join(element.get_text(separator=" ", strip=True).split())
