# ABOUTME: Antagonist name extraction from Marvel Fandom issue page HTML using BeautifulSoup
# ABOUTME: Filters navigation arrow links and helper links that wrap the real character link

"""
Marvel Fandom issue page layout:

- one ``<h2>Appearing in "..."</h2>`` heading per story in the issue
- inside each story section a ``<p><b>Antagonists:</b></p>`` label
- followed by a ``<ul>`` whose ``<li>`` items hold the character link,
  frequently sandwiched between prev/next appearance arrows::

      <li><a>⏴</a> <a>Chameleon</a> <a>⏵</a> <span>(First appearance)</span></li>
"""

import re
from collections.abc import Iterator

from bs4 import BeautifulSoup, Tag

from villain_timeline.errors import ParseFailure
from villain_timeline.utils.logging import get_logger

logger = get_logger(__name__)

SECTION_HEADING_TAG = "h2"
STORY_HEADING_MARKER = "appearing in"
ANTAGONIST_LABEL = "Antagonists"
LABEL_TAGS = ["b", "strong"]
LIST_TAGS = ("ul", "ol")

# Prev/next pointers the wiki uses around appearance links, as regex class ranges
NAVIGATION_ARROW_RANGES = (
    "\u2190-\u21ff"  # Arrows
    "\u27f0-\u27ff"  # Supplemental Arrows-A
    "\u2900-\u297f"  # Supplemental Arrows-B
    "\u2b00-\u2bff"  # Miscellaneous Symbols and Arrows
    "\U0001f800-\U0001f8ff"  # Supplemental Arrows-C
    "\u25b2-\u25c5"  # pointing triangles
    "\u23f4-\u23f7"  # media control triangles
    "\u2794\u2798-\u27af\u27b1-\u27be"  # dingbat arrows
    "\u2039\u203a\u00ab\u00bb\u276e\u276f"  # angle quotes
    "\ufe0e\ufe0f"  # emoji variation selectors
)

_ARROW_ONLY = re.compile(rf"^[\s{NAVIGATION_ARROW_RANGES}]+$")
_SEE_HELPER = re.compile(r"^see", re.IGNORECASE)


def is_navigation_noise(text: str) -> bool:
    """True for empty strings and strings made only of whitespace and arrow glyphs."""
    return not text or _ARROW_ONLY.match(text) is not None


def _is_candidate_name(text: str) -> bool:
    # Single characters are treated as noise, even a legitimate one-letter name
    return len(text) > 1 and not is_navigation_noise(text)


def _name_from_links(links: list[Tag]) -> str | None:
    if len(links) == 1:
        text = links[0].get_text().strip()
        return text if _is_candidate_name(text) else None

    for link in links:
        text = link.get_text().strip()
        if _is_candidate_name(text) and not _SEE_HELPER.match(text):
            return text
    return None


def _name_from_text(item: Tag) -> str | None:
    first_line = item.get_text().split("\n")[0].strip()
    return first_line if _is_candidate_name(first_line) else None


def extract_item_name(item: Tag) -> str | None:
    """Derive at most one character name from a list item.

    Precedence: the only link, else the first link that is not an arrow or a
    "See ..." helper, else the item's first line of text.
    """
    links = item.find_all("a")
    name = _name_from_links(links) if links else None
    return name or _name_from_text(item)


def iter_story_sections(soup: BeautifulSoup) -> Iterator[list[Tag]]:
    """Yield the sibling elements of each "Appearing in" story section, in document order."""
    for heading in soup.find_all(SECTION_HEADING_TAG):
        if STORY_HEADING_MARKER not in heading.get_text().lower():
            continue

        section: list[Tag] = []
        for sibling in heading.find_next_siblings():
            if sibling.name == SECTION_HEADING_TAG:
                break
            section.append(sibling)
        yield section


def _has_antagonist_label(element: Tag) -> bool:
    if element.name in LABEL_TAGS and ANTAGONIST_LABEL in element.get_text():
        return True
    return any(ANTAGONIST_LABEL in label.get_text() for label in element.find_all(LABEL_TAGS))


def _antagonist_list(element: Tag) -> Tag | None:
    if element.name in LIST_TAGS:
        return element
    following = element.find_next_sibling()
    if following is not None and following.name in LIST_TAGS:
        return following
    return None


def _extract_from_soup(soup: BeautifulSoup) -> list[str]:
    antagonists: list[str] = []

    for story_index, section in enumerate(iter_story_sections(soup)):
        found = 0
        for element in section:
            if not _has_antagonist_label(element):
                continue

            name_list = _antagonist_list(element)
            if name_list is None:
                continue

            for item in name_list.find_all("li"):
                name = extract_item_name(item)
                if name:
                    antagonists.append(name)
                    found += 1

        logger.debug("Parsed story section", story_index=story_index, antagonist_count=found)

    return antagonists


def extract_antagonists(markup: str | bytes, issue_key: int | None = None) -> list[str]:
    """Return the antagonist names listed on an issue page, across all of its stories.

    Never raises: unparseable markup is logged and yields an empty list.

    Args:
        markup: Raw HTML of the issue page
        issue_key: Issue number, used for log context only

    Returns:
        One name per qualifying list item, in document order
    """
    try:
        if not isinstance(markup, (str, bytes)):
            raise ParseFailure(f"Expected HTML text, got {type(markup).__name__}")

        soup = BeautifulSoup(markup, "html.parser")
        return _extract_from_soup(soup)

    except Exception as e:
        logger.error(
            "Failed to parse antagonists from HTML",
            issue_key=issue_key,
            error=str(e),
            error_type=type(e).__name__,
        )
        return []
