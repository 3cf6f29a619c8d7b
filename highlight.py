# highlight.py

import html
import re
from dataclasses import dataclass
from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

import config


@dataclass(frozen=True)
class HighlightConfig:
    """Settings for code block output, fixed once per build."""
    pre_class: str = config.CODE_PRE_CLASS
    code_class: str = config.CODE_BLOCK_CLASS
    style: str = config.PYGMENTS_STYLE

    def stylesheet(self) -> str:
        """CSS for the Pygments token classes, scoped to the <pre> shell."""
        return HtmlFormatter(style=self.style).get_style_defs(f'.{self.pre_class}')


def slugify_language(language: Optional[str]) -> str:
    """'C++' -> 'c-', 'Objective C' -> 'objective-c'. A missing tag gives ''."""
    if not language:
        return ''
    return re.sub(r'[^a-z0-9]+', '-', language, flags=re.IGNORECASE).lower()


def escape_html(text: str) -> str:
    # Same set as markdown-it's escapeHtml: & < > "
    return html.escape(text, quote=False).replace('"', '&quot;')


class CodeBlockFormatter:
    def __init__(self, highlight_config: Optional[HighlightConfig] = None):
        self.config = highlight_config or HighlightConfig()
        self.formatter = HtmlFormatter(nowrap=True)

    def wrap(self, body: str, language: Optional[str]) -> str:
        return (
            f'<pre class="{self.config.pre_class}">'
            f'<code class="{self.config.code_class} {slugify_language(language)}">'
            f'{body}</code></pre>'
        )

    def highlight(self, code: str, language: str) -> str:
        # Keep newlines as they are, the fallback path does not touch them either
        lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
        return highlight(code, lexer, self.formatter)

    def format(self, code: str, language: Optional[str] = None) -> str:
        if language and is_known_language(language):
            try:
                return self.wrap(self.highlight(code, language), language)
            except Exception:
                pass

        return self.wrap(escape_html(code), language)


def is_known_language(language: str) -> bool:
    try:
        get_lexer_by_name(language)
    except ClassNotFound:
        return False
    return True
