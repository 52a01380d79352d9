"""Markdown rendering helpers shared by the Qt and web clients.

Question prompts and explanations are stored as markdown so that command
names, ports and code snippets can be formatted. Raw HTML in the catalog is
escaped rather than passed through.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts catalog markdown into HTML fragments or small documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into a block-level HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line without the surrounding paragraph, for option labels."""

        return self._markdown.renderInline(markdown_text.strip())

    def render_document(self, markdown_text: str, font_size: int = 14) -> str:
        """Wrap a rendered fragment in a minimal HTML document for QTextBrowser."""

        fragment = self.render_fragment(markdown_text)
        return (
            "<html><body>"
            f"<div style=\"font-size: {font_size}pt;\">{fragment}</div>"
            "</body></html>"
        )


# Shared by the Qt thread and the API worker; renders do not mutate the parser.
renderer = MarkdownRenderer()
