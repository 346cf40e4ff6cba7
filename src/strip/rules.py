"""Rewrite rules — one pass per markdown construct.

Every rule is a pure ``(text, config) -> text`` function doing a single
global ``re.sub``.  Matched markup is replaced through :func:`blank` so the
surrounding text keeps its row and column; readable payload (link text, alt
text, header text, footnote notes) is kept as-is.

``RULES`` fixes the order the pipeline applies them in.  The order matters:

  * list markers go first, before anything else touches line-leading text
  * horizontal rules, titles and headers run before code blocks
  * emphasis runs after inline code, so ``_`` and ``*`` inside code spans
    are already gone when delimiters are matched
"""
from __future__ import annotations

import re
from collections.abc import Callable
from typing import NamedTuple, TypeVar

from src.shared.config import StripConfig
from src.strip.blank import blank

Rule = Callable[[str, StripConfig], str]

_T = TypeVar("_T", bound=tuple)

# Emphasis nested deeper than this keeps its inner delimiters.
MAX_EMPHASIS_DEPTH = 32

LIST_MARKER = re.compile(r"^(?P<spaces>[ \t]*)(?P<bullet>[*+-] |\d+\. )", re.M)
AUTOLINK = re.compile(r"<(?P<url>.*?)>")
# trailing [ \t\r]* lets CRLF lines match; the \r is blanked with the markup
HORIZONTAL_RULE = re.compile(r"^(?P<rule>[-*_]{3,}[ \t\r]*)$\n?", re.M)
TITLE = re.compile(r"^(?P<title>[=-]{2,}[ \t\r]*)$\n?", re.M)
FOOTNOTE = re.compile(
    r"(?P<mark>\[\^\d+\])"
    # note: rest of the line, then blank or indented continuation lines
    r"(?:(?P<colon>:)(?P<note>[^\n]*(?:\n(?:[ \t][^\n]*\n|\n)*)?))?"
)
INLINE_FOOTNOTE = re.compile(r"(?P<mark>\[\^[^\]\n]*\])\((?P<note>.+?)\)")
IMAGE = re.compile(
    r"(?P<bang>!\[)(?P<alt>[^\[\]\n]*)(?P<sep>\][\[(])(?P<src>.*?)(?P<eot>[\])])"
)
LINK = re.compile(
    r"(?P<bot>\[)(?P<text>[^\[\]\n]*)(?P<sep>\][\[(])(?P<href>.*?)(?P<eot>[\])])"
)
LAZY_LINK_REF = re.compile(
    r'^(?P<mark>\[\*\]: )(?P<href>(?>\S+)(?: "[^"\n]*")?[ \t\r]*)$', re.M
)
LINK_REF = re.compile(
    r'^(?P<bot>\[)(?P<label>[^\]\n]*)(?P<colon>\]: )'
    r'(?P<href>(?>\S+)(?: "[^"\n]*")?[ \t\r]*)$',
    re.M,
)
HEADER = re.compile(r"^(?P<hashes>#{1,6})(?=[ \t\r]|$)", re.M)
# opening fence: line start, possessive so the fence never gives chars to lang
CODE_BLOCK = re.compile(
    r"^(?P<fence>[`~]{3,}+)(?P<lang>[^\n]*+)\n(?P<code>.*?\n)??(?P=fence)",
    re.M | re.S,
)
INLINE_CODE = re.compile(r"`(?P<code>.+?)`")
# delimiter run: 1-3 of one character
_EMPHASIS = r"(?P<em>(?P<ch>[_*~])(?P=ch){0,2})(?P<inner>.+?)(?P=em)"
EMPHASIS = re.compile(_EMPHASIS)
# top level only: a line-leading bullet is consumed whole and never opens emphasis
BULLET_OR_EMPHASIS = re.compile(r"(?P<bullet>^[ \t]*[*+-] )|" + _EMPHASIS, re.M)
BLOCKQUOTE = re.compile(r"^(?P<quote>(?:> )+)", re.M)


# ── Captures ────────────────────────────────────────────────────────────────

class ListMarker(NamedTuple):
    spaces: str
    bullet: str


class Autolink(NamedTuple):
    url: str


class HorizontalRule(NamedTuple):
    rule: str


class Title(NamedTuple):
    title: str


class Footnote(NamedTuple):
    mark: str
    colon: str
    note: str


class InlineFootnote(NamedTuple):
    mark: str
    note: str


class Image(NamedTuple):
    bang: str
    alt: str
    sep: str
    src: str
    eot: str


class Link(NamedTuple):
    bot: str
    text: str
    sep: str
    href: str
    eot: str


class LazyLinkRef(NamedTuple):
    mark: str
    href: str


class LinkRef(NamedTuple):
    bot: str
    label: str
    colon: str
    href: str


class Header(NamedTuple):
    hashes: str


class CodeBlock(NamedTuple):
    fence: str
    lang: str
    code: str


class InlineCode(NamedTuple):
    code: str


class Emphasis(NamedTuple):
    em: str
    inner: str


class Blockquote(NamedTuple):
    quote: str


def capture(kind: type[_T], match: re.Match[str]) -> _T:
    """Build a typed capture from *match*; unmatched groups become ``""``."""
    return kind._make(match.group(name) or "" for name in kind._fields)  # type: ignore[attr-defined]


# ── Rules ───────────────────────────────────────────────────────────────────

def blank_list_markers(text: str, config: StripConfig) -> str:
    """``  * item`` / ``1. item`` -> indent and bullet blanked."""
    if not config.strip_list_markers:
        return text
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        m = capture(ListMarker, match)
        return blank(m.spaces, sep) + blank(m.bullet, sep)

    return LIST_MARKER.sub(_replace, text)


def blank_autolinks(text: str, config: StripConfig) -> str:
    """``<http://x>`` -> `` http://x ``."""
    sep = config.separator
    return AUTOLINK.sub(lambda match: sep + capture(Autolink, match).url + sep, text)


def blank_horizontal_rules(text: str, config: StripConfig) -> str:
    """A ``---`` / ``***`` / ``___`` line becomes a blank line."""
    sep = config.separator
    return HORIZONTAL_RULE.sub(
        lambda match: blank(capture(HorizontalRule, match).rule, sep) + "\n", text
    )


def blank_titles(text: str, config: StripConfig) -> str:
    """Setext ``====`` / ``----`` underlines become blank lines."""
    sep = config.separator
    return TITLE.sub(lambda match: blank(capture(Title, match).title, sep) + "\n", text)


def blank_footnotes(text: str, config: StripConfig) -> str:
    """``[^1]`` references and ``[^1]:`` definitions; the note text stays."""
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        m = capture(Footnote, match)
        return blank(m.mark, sep) + blank(m.colon, sep) + m.note

    return FOOTNOTE.sub(_replace, text)


def blank_inline_footnotes(text: str, config: StripConfig) -> str:
    """``[^jim](note)`` -> marker blanked, ``(note)`` kept."""
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        m = capture(InlineFootnote, match)
        return blank(m.mark, sep) + "(" + m.note + ")"

    return INLINE_FOOTNOTE.sub(_replace, text)


def blank_images(text: str, config: StripConfig) -> str:
    """``![alt](src)`` / ``![alt][ref]`` -> only the alt text stays."""
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        m = capture(Image, match)
        return (blank(m.bang, sep) + m.alt + blank(m.sep, sep)
                + blank(m.src, sep) + blank(m.eot, sep))

    return IMAGE.sub(_replace, text)


def blank_links(text: str, config: StripConfig) -> str:
    """``[text](href)`` / ``[text][ref]`` -> only the link text stays."""
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        m = capture(Link, match)
        return (blank(m.bot, sep) + m.text + blank(m.sep, sep)
                + blank(m.href, sep) + blank(m.eot, sep))

    return LINK.sub(_replace, text)


def blank_lazy_link_refs(text: str, config: StripConfig) -> str:
    """``[*]: url`` definitions are blanked whole."""
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        m = capture(LazyLinkRef, match)
        return blank(m.mark, sep) + blank(m.href, sep)

    return LAZY_LINK_REF.sub(_replace, text)


def blank_link_refs(text: str, config: StripConfig) -> str:
    """``[label]: url "title"`` definitions are blanked whole, label included."""
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        m = capture(LinkRef, match)
        return "".join(blank(part, sep) for part in m)

    return LINK_REF.sub(_replace, text)


def blank_headers(text: str, config: StripConfig) -> str:
    """``## Title`` -> hashes blanked, the space and title kept."""
    sep = config.separator
    return HEADER.sub(lambda match: blank(capture(Header, match).hashes, sep), text)


def blank_code_blocks(text: str, config: StripConfig) -> str:
    """Fenced code blocks.

    Fences and the language tag are always blanked.  The body is blanked
    too when ``strip_code`` is set, and in compact mode the whole block is
    dropped.  With ``strip_code`` off the body is kept verbatim.
    """
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        m = capture(CodeBlock, match)
        if config.strip_code and config.compact_output:
            return ""
        fence = blank(m.fence, sep)
        body = blank(m.code, sep) if config.strip_code else m.code
        return fence + blank(m.lang, sep) + "\n" + body + fence

    return CODE_BLOCK.sub(_replace, text)


def blank_inline_code(text: str, config: StripConfig) -> str:
    """`` `code` `` spans, following the same ``strip_code`` / compact rules."""
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        code = capture(InlineCode, match).code
        if not config.strip_code:
            return sep + code + sep
        if config.compact_output:
            return ""
        return sep + blank(code, sep) + sep

    return INLINE_CODE.sub(_replace, text)


def blank_emphasis(text: str, config: StripConfig, _depth: int = 0) -> str:
    """``*em*``, ``**strong**``, ``_em_``, ``~~strike~~``, nested any way.

    The inner text is resolved first by recursing on it; a recursive call
    with nothing left to match returns its input unchanged.  The inner span
    is always shorter than the match, and recursion stops at
    ``MAX_EMPHASIS_DEPTH`` regardless.

    At the top level a ``* `` list bullet left in place (``strip_list_markers``
    off) is passed through, so it never pairs with a later ``*``.
    """
    sep = config.separator

    def _replace(match: re.Match[str]) -> str:
        bullet = match.groupdict().get("bullet")
        if bullet is not None:
            return bullet
        m = capture(Emphasis, match)
        inner = m.inner
        if _depth < MAX_EMPHASIS_DEPTH:
            inner = blank_emphasis(inner, config, _depth + 1)
        delimiter = blank(m.em, sep)
        return delimiter + inner + delimiter

    pattern = BULLET_OR_EMPHASIS if _depth == 0 else EMPHASIS
    return pattern.sub(_replace, text)


def blank_blockquotes(text: str, config: StripConfig) -> str:
    """Leading ``> `` (and ``> > ``) markers are blanked."""
    sep = config.separator
    return BLOCKQUOTE.sub(lambda match: blank(capture(Blockquote, match).quote, sep), text)


RULES: tuple[Rule, ...] = (
    blank_list_markers,
    blank_autolinks,
    blank_horizontal_rules,
    blank_titles,
    blank_footnotes,
    blank_inline_footnotes,
    blank_images,
    blank_links,
    blank_lazy_link_refs,
    blank_link_refs,
    blank_headers,
    blank_code_blocks,
    blank_inline_code,
    blank_emphasis,
    blank_blockquotes,
)
