# markdown_renderer.py

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional
from urllib.parse import quote
import xml.etree.ElementTree as etree

import markdown
from markdown.extensions import Extension
from markdown.extensions.toc import stashedHTML2text, unescape
from markdown.treeprocessors import Treeprocessor

import config
from highlight import CodeBlockFormatter, HighlightConfig

DEFAULT_OPTIONS = {
    'base_opts': {},
    'heading_permalinks': True,
}

HEADING_TAGS = {'h1', 'h2', 'h3', 'h4', 'h5', 'h6'}


@dataclass(frozen=True)
class RendererConfig:
    breaks: bool = False
    html: bool = True
    linkify: bool = False
    typographer: bool = True

    def with_overrides(self, overrides: Optional[Dict[str, Any]]) -> 'RendererConfig':
        if not overrides:
            return self
        return replace(self, **overrides)


BASE_CONFIG = RendererConfig(**config.MARKDOWN_BASE_OPTS)


# -------------------------------------------------------------------------
# Heading ids
# -------------------------------------------------------------------------
def heading_slug(value: str, separator: str = '-') -> str:
    """
    Id for a heading: trimmed, lower cased, whitespace runs joined with the
    separator, then percent-encoded like encodeURIComponent.
    """
    slug = re.sub(r'\s+', separator, str(value).strip().lower())
    return quote(slug, safe="-_.!~*'()")


def unique_slug(slug: str, used_ids: set) -> str:
    """'part-1', 'part-1-1', 'part-1-2', ..."""
    candidate = slug
    i = 1
    while candidate in used_ids:
        candidate = f'{slug}-{i}'
        i += 1
    used_ids.add(candidate)
    return candidate


class HeadingIdTreeprocessor(Treeprocessor):
    """
    Gives every heading its id before `toc` runs, so `toc` keeps these ids and
    only adds the permalinks.
    """

    def run(self, root: etree.Element) -> None:
        used_ids = {el.get('id') for el in root.iter() if el.get('id')}
        for el in root.iter():
            if el.tag not in HEADING_TAGS or 'id' in el.attrib:
                continue
            text = unescape(stashedHTML2text(''.join(el.itertext()), self.md))
            el.set('id', unique_slug(heading_slug(text), used_ids))


class HeadingAnchorTreeprocessor(Treeprocessor):
    """
    Runs after `toc` has wrapped the heading text in a link (when permalinks
    are on). Makes the headings focusable and wraps the link text in a <span>
    so Safari's reader mode keeps the heading text.
    """

    def __init__(self, md, permalink_class: Optional[str]):
        super().__init__(md)
        self.permalink_class = permalink_class

    def run(self, root: etree.Element) -> None:
        for el in root.iter():
            if el.tag not in HEADING_TAGS or 'id' not in el.attrib:
                continue
            el.set('tabindex', config.HEADING_TABINDEX)
            if self.permalink_class:
                for anchor in el.findall('a'):
                    if anchor.get('class') == self.permalink_class:
                        wrap_children(anchor, 'span')


def wrap_children(parent: etree.Element, tag: str) -> None:
    wrapper = etree.Element(tag)
    wrapper.text = parent.text
    parent.text = None
    for child in list(parent):
        parent.remove(child)
        wrapper.append(child)
    parent.append(wrapper)


class HeadingAnchorExtension(Extension):
    def __init__(self, **kwargs):
        self.config = {
            'permalinks': [True, 'Wrap headings in a link to themselves'],
            'permalink_class': [config.HEADING_PERMALINK_CLASS, 'CSS class of the heading link'],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        md.registerExtension(self)
        permalink_class = self.getConfig('permalink_class') if self.getConfig('permalinks') else None
        # toc is registered at 5: ids go in before it, the span after it
        md.treeprocessors.register(HeadingIdTreeprocessor(md), 'heading_id', 6)
        md.treeprocessors.register(HeadingAnchorTreeprocessor(md, permalink_class), 'heading_anchor', 4)


# -------------------------------------------------------------------------
# html: False
# -------------------------------------------------------------------------
class EscapeHtmlExtension(Extension):
    """Stop raw HTML being passed through, it is escaped as text instead."""

    def extendMarkdown(self, md):
        md.preprocessors.deregister('html_block')
        md.inlinePatterns.deregister('html')


# -------------------------------------------------------------------------
# Renderer
# -------------------------------------------------------------------------
class MarkdownRenderer:
    """
    Reusable Markdown -> HTML converter. Only holds configuration; every call
    to render() builds its own markdown.Markdown instance.
    """

    def __init__(
        self,
        renderer_config: RendererConfig = BASE_CONFIG,
        heading_permalinks: bool = True,
        highlight_config: Optional[HighlightConfig] = None,
    ):
        self.config = renderer_config
        self.heading_permalinks = heading_permalinks
        self.code_formatter = CodeBlockFormatter(highlight_config)

    def format_fence(self, source, language, class_name, options, md, **kwargs) -> str:
        return self.code_formatter.format(source, language or None)

    def option_extensions(self) -> list:
        extensions = []
        if self.config.breaks:
            extensions.append('nl2br')
        if not self.config.html:
            extensions.append(EscapeHtmlExtension())
        if self.config.linkify:
            extensions.append('pymdownx.magiclink')
        if self.config.typographer:
            extensions.append('smarty')
        return extensions

    def plugin_extensions(self) -> list:
        # Order matters for id de-duplication and nesting
        return [
            ('toc', {
                'anchorlink': self.heading_permalinks,
                'anchorlink_class': config.HEADING_PERMALINK_CLASS,
            }),
            (HeadingAnchorExtension(permalinks=self.heading_permalinks), None),
            ('def_list', None),
            ('pymdownx.arithmatex', {'generic': True}),
        ]

    def build(self) -> markdown.Markdown:
        extensions = [
            'tables',
            'pymdownx.tilde',
            'pymdownx.superfences',
            *self.option_extensions(),
        ]
        extension_configs = {
            # every fence, with or without a language, goes through CodeBlockFormatter
            'pymdownx.superfences': {
                'custom_fences': [
                    {'name': '*', 'class': config.CODE_BLOCK_CLASS, 'format': self.format_fence},
                ],
            },
        }
        for extension, extension_config in self.plugin_extensions():
            extensions.append(extension)
            if extension_config is not None:
                extension_configs[extension] = extension_config

        return markdown.Markdown(
            extensions=extensions,
            extension_configs=extension_configs,
            output_format='html5',
        )

    def render(self, text: str) -> str:
        return self.build().convert(text)

    __call__ = render


def create_renderer(options: Optional[Dict[str, Any]] = None,
                    highlight_config: Optional[HighlightConfig] = None) -> MarkdownRenderer:
    """
    options:
        base_opts          - overrides for breaks / html / linkify / typographer
        heading_permalinks - link each heading to itself (default True)
    """
    opts = {**DEFAULT_OPTIONS, **(options or {})}
    return MarkdownRenderer(
        renderer_config=BASE_CONFIG.with_overrides(opts['base_opts']),
        heading_permalinks=bool(opts['heading_permalinks']),
        highlight_config=highlight_config,
    )
