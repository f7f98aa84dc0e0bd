"""Rewriting of ``[PageName]`` link tokens.

The renderer runs over text that has already been through the HTML
template, so page content is escaped by the time a token is rewritten and
only the generated anchors are live markup.
"""

import re

# A "[" followed by everything up to the next "]" on the same line.
# Leftmost-first and non-overlapping: "[A][B]" is two tokens.
LINK_PATTERN = re.compile(r"\[([^\]\n]*)\]")

VIEW_PREFIX = "/view/"


class LinkRenderer:
    """Turns link tokens into anchors pointing at the view route.

    The captured title is embedded as-is. It is neither validated nor
    escaped again, since the surrounding template has escaped it already.
    A link to a page that does not exist is still a link; the view route
    sends the reader to the editor.

    Empty brackets ``[]`` produce an anchor with an empty title.
    """

    def __init__(
        self,
        pattern: re.Pattern[str] = LINK_PATTERN,
        prefix: str = VIEW_PREFIX,
    ):
        self.pattern = pattern
        self.prefix = prefix

    def _replace(self, m: re.Match[str]) -> str:
        title = m.group(1)
        return f'<a href="{self.prefix}{title}">{title}</a>'

    def render(self, text: str) -> str:
        """Replace every link token in ``text`` with an anchor."""
        return self.pattern.sub(self._replace, text)
