"""
WordTally Backend — Word Counter
=================================

What:  Counts the words a reader would see on an HTML page.
How:   BeautifulSoup parses the body, non-visible elements (scripts, styles,
       templates) are removed, and the remaining text is split on whitespace.

Counting rule:
    - A word is a maximal run of non-whitespace characters in the visible text
    - Tags separate words: "<b>hello</b><i>world</i>" is two words
    - An empty body, or a body with no visible text, counts as 0
    - Plain-text bodies are counted the same way ("hello world" → 2)
"""

from bs4 import BeautifulSoup

# Elements whose content never renders as page text
INVISIBLE_TAGS = ["script", "style", "noscript", "template"]


def count_words(body: str) -> int:
    """Return the number of visible words in an HTML (or plain-text) body."""
    if not body or not body.strip():
        return 0

    soup = BeautifulSoup(body, "html.parser")
    for tag in soup(INVISIBLE_TAGS):
        tag.decompose()

    return len(soup.get_text(separator=" ").split())
