"""Body text statistics (word count, reading time) from markdown-it tokens"""

import math
import re

from markdown_it import MarkdownIt


WORD_RE = re.compile(r"[\w'’-]+")
BREAKS = {'softbreak', 'hardbreak'}


def prose_text(markdown: str) -> str:
    """Return the readable text of a markdown body, dropping code, html and syntax."""
    parts = []
    for tok in MarkdownIt("commonmark").parse(markdown):
        if tok.type != 'inline' or not tok.children:
            continue
        for child in tok.children:
            if child.type == 'text':
                parts.append(child.content)
            elif child.type in BREAKS:
                parts.append(' ')
        parts.append('\n')
    return ''.join(parts)


def word_count(markdown: str) -> int:
    """Count words in the prose of a markdown body."""
    return len(WORD_RE.findall(prose_text(markdown)))


def reading_time(words: int, words_per_minute: int = 200) -> int:
    """Whole minutes to read `words`, never less than one."""
    return max(1, math.ceil(words / words_per_minute))
