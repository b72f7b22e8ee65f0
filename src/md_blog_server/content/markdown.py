"""
Markdown Rendering

Turns a post body into HTML with a fixed set of styling hooks.

The source is parsed into the markdown-it block token stream, a handful of
block tokens are swapped for literal HTML, and the stream is serialized by
the stock HTML renderer. Everything not listed below passes through as-is.

Substitutions
-------------
- paragraph open          -> <p class="text-white"> (or text-body, light profile)
- fence, no info string   -> <pre><code class="text-white">
- fence, any language     -> <pre><code class='language-python text-white'>
- indented code block     -> <pre><code class="text-white">
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token


PLAIN_CODE_OPEN = '<pre><code class="text-white">'
# The declared language is not carried through; highlighting is python-only.
LANGUAGE_CODE_OPEN = "<pre><code class='language-python text-white'>"
CODE_CLOSE = "</code></pre>\n"


@dataclass(frozen=True)
class MarkdownProfile:
    name: str
    paragraph_class: str

    @property
    def paragraph_open(self) -> str:
        return f'<p class="{self.paragraph_class}">'


PROFILES: Dict[str, MarkdownProfile] = {
    "dark": MarkdownProfile(name="dark", paragraph_class="text-white"),
    "light": MarkdownProfile(name="light", paragraph_class="text-body"),
}


def get_profile(name: str) -> MarkdownProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown markdown profile: {name!r}") from None


def _html_token(html: str) -> Token:
    return Token("html_block", "", 0, content=html, block=True)


class MarkdownRenderer:
    """
    CommonMark renderer that applies the profile's block substitutions.
    """

    def __init__(self, profile: str = "dark") -> None:
        self._profile = get_profile(profile)
        self._md = MarkdownIt("commonmark")

    @property
    def profile(self) -> MarkdownProfile:
        return self._profile

    def map_token(self, token: Token) -> Token:
        """
        Replace one block token with its styled HTML equivalent.
        """
        if token.type == "paragraph_open" and not token.hidden:
            return _html_token(self._profile.paragraph_open)

        if token.type == "fence":
            info = token.info.strip()
            lang = info.split()[0] if info else ""
            opener = LANGUAGE_CODE_OPEN if lang else PLAIN_CODE_OPEN
            return _html_token(opener + escapeHtml(token.content) + CODE_CLOSE)

        if token.type == "code_block":
            return _html_token(PLAIN_CODE_OPEN + escapeHtml(token.content) + CODE_CLOSE)

        return token

    def tokens(self, source: str, env: Optional[dict] = None) -> List[Token]:
        return [self.map_token(t) for t in self._md.parse(source, env)]

    def render(self, source: str) -> str:
        env: dict = {}
        tokens = self.tokens(source, env)
        return self._md.renderer.render(tokens, self._md.options, env)


_renderers: Dict[str, MarkdownRenderer] = {}


def render_markdown(source: str, profile: str = "dark") -> str:
    """
    Render markdown to HTML using a shared renderer for ``profile``.
    """
    renderer = _renderers.get(profile)
    if renderer is None:
        renderer = _renderers[profile] = MarkdownRenderer(profile)
    return renderer.render(source)
