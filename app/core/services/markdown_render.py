"""
Purpose: Turn agent Markdown into HTML that is safe to drop into the page.
Raw HTML in the reply is escaped, not passed through, and links or images
pointing at script-capable schemes lose their target.
"""

from __future__ import annotations
import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]
UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:")
URL_ATTRIBUTES = ("href", "src")


class _SafeUrlTreeprocessor(Treeprocessor):
    def run(self, root):
        for el in root.iter():
            for attr in URL_ATTRIBUTES:
                value = el.get(attr)
                if value is None:
                    continue
                compact = "".join(value.split()).lower()
                if compact.startswith(UNSAFE_SCHEMES):
                    el.set(attr, "#")


class EscapeHtmlExtension(Extension):
    """Drop the raw-HTML block and inline handlers so HTML is rendered as text."""

    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        # after 'inline' (20), which is where links get their href
        md.treeprocessors.register(_SafeUrlTreeprocessor(md), "safe_urls", 5)


def render_markdown(text: str) -> str:
    """Markdown in, HTML out. Blank input renders to an empty string."""
    if not (text or "").strip():
        return ""
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS + [EscapeHtmlExtension()])
    return md.convert(text)
