from __future__ import annotations

import html
import logging
from typing import Optional, Union

from fintrack.search.pattern_compiler import Compiled, Invalid, Matcher

logger = logging.getLogger(__name__)

MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"


def escape_html(text: Optional[str]) -> str:
    if not text:
        return ""
    return html.escape(text, quote=True)


def highlight(text: Optional[str], matcher: Union[Compiled, Invalid, Matcher, None]) -> str:
    """
    Entoure chaque match de <mark>...</mark>.
    Tout le reste (et le contenu des marks) est échappé : jamais de HTML brut en sortie.
    """
    if isinstance(matcher, Compiled):
        matcher = matcher.matcher
    if not isinstance(matcher, Matcher) or not text:
        return escape_html(text)

    try:
        parts: list[str] = []
        cursor = 0
        for start, end in matcher.find_all(text):
            # les matches vides n'ont rien à surligner
            if start == end:
                continue
            parts.append(escape_html(text[cursor:start]))
            parts.append(MARK_OPEN + escape_html(text[start:end]) + MARK_CLOSE)
            cursor = end
        parts.append(escape_html(text[cursor:]))
        return "".join(parts)
    except Exception as e:
        logger.warning("Error highlighting matches: %s", e)
        return escape_html(text)
