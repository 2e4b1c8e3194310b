"""
HTML allowlist sanitizer.

Keeps the safe document subset of HTML (structure, text formatting, lists,
tables, links, images and CSS) and strips everything that can execute script
or load active content. Inline and embedded CSS is kept only when it passes
is_safe_css.
"""

import re

from bs4 import BeautifulSoup, Comment, Tag

ALLOWED_TAGS = frozenset({
    "a", "abbr", "acronym", "address", "article", "aside", "b", "bdi", "bdo",
    "blockquote", "br", "caption", "center", "cite", "code", "col", "colgroup",
    "dd", "del", "details", "dfn", "div", "dl", "dt", "em", "figcaption",
    "figure", "footer", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr",
    "i", "img", "ins", "kbd", "li", "main", "mark", "nav", "ol", "p", "pre",
    "q", "rp", "rt", "ruby", "s", "samp", "section", "small", "span",
    "strike", "strong", "sub", "summary", "sup", "table", "tbody", "td",
    "tfoot", "th", "thead", "time", "tr", "tt", "u", "ul", "var", "wbr",
})

# Removed together with everything inside them
DROPPED_TAGS = frozenset({
    "script", "iframe", "frame", "frameset", "object", "embed",
    "applet", "template", "noscript", "noembed", "form", "input", "button",
    "select", "textarea", "option", "link", "meta", "base", "svg", "math",
    "audio", "video", "source", "track", "canvas", "head", "title",
})

# Kept only when their CSS passes is_safe_css
STYLE_TAG = "style"

GLOBAL_ATTRIBUTES = frozenset({"id", "class", "title", "lang", "dir", "style"})

TAG_ATTRIBUTES = {
    "a": frozenset({"href", "name", "target", "rel"}),
    "img": frozenset({"src", "alt", "width", "height"}),
    "ol": frozenset({"start", "reversed", "type"}),
    "li": frozenset({"value"}),
    "td": frozenset({"colspan", "rowspan", "align", "valign"}),
    "th": frozenset({"colspan", "rowspan", "align", "valign", "scope"}),
    "col": frozenset({"span"}),
    "colgroup": frozenset({"span"}),
    "blockquote": frozenset({"cite"}),
    "q": frozenset({"cite"}),
    "del": frozenset({"cite", "datetime"}),
    "ins": frozenset({"cite", "datetime"}),
    "time": frozenset({"datetime"}),
    "details": frozenset({"open"}),
}

URL_ATTRIBUTES = frozenset({"href", "src", "cite"})
SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto", "tel"})

_SCHEME_RE = re.compile(r"^([a-z][a-z0-9+.\-]*):", re.IGNORECASE)
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x20\x7f]+")
_CSS_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_CSS_URL_RE = re.compile(r"url\(([^)]*)\)")

UNSAFE_CSS_TOKENS = (
    "expression(",
    "javascript:",
    "vbscript:",
    "-moz-binding",
    "behavior:",
    "@import",
)


def is_safe_url(value: str, tag_name: str = "") -> bool:
    """Allow relative URLs, fragments and a short list of schemes."""
    # Browsers ignore embedded whitespace/control chars in schemes ("java\tscript:")
    compact = _CONTROL_CHARS_RE.sub("", value)
    match = _SCHEME_RE.match(compact)
    if match is None:
        return True
    scheme = match.group(1).lower()
    if scheme in SAFE_URL_SCHEMES:
        return True
    return tag_name == "img" and compact.lower().startswith("data:image/")


def is_safe_css(css: str) -> bool:
    """Reject CSS that can run script or pull in non-http resources."""
    compact = _CONTROL_CHARS_RE.sub("", _CSS_COMMENT_RE.sub("", css)).lower()
    # CSS escapes can spell out any of the tokens below
    if "\\" in compact:
        return False
    if any(token in compact for token in UNSAFE_CSS_TOKENS):
        return False
    for target in _CSS_URL_RE.findall(compact):
        if not is_safe_url(target.strip("'\"")):
            return False
    return True


def _clean_attributes(tag: Tag) -> None:
    allowed = GLOBAL_ATTRIBUTES | TAG_ATTRIBUTES.get(tag.name, frozenset())
    for attr in list(tag.attrs):
        name = attr.lower()
        if name.startswith("on") or name not in allowed:
            del tag.attrs[attr]
            continue
        value = tag.attrs[attr]
        if name in URL_ATTRIBUTES:
            if not isinstance(value, str) or not is_safe_url(value, tag.name):
                del tag.attrs[attr]
        elif name == "style":
            if not isinstance(value, str) or not is_safe_css(value):
                del tag.attrs[attr]


def sanitize_html(html: str) -> str:
    """Return ``html`` reduced to the allowlisted tags and attributes."""
    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        name = tag.name.lower()
        if name in DROPPED_TAGS:
            tag.decompose()
        elif name == STYLE_TAG:
            if is_safe_css(tag.decode_contents()):
                tag.attrs = {}
            else:
                tag.decompose()
        elif name not in ALLOWED_TAGS:
            tag.unwrap()
        else:
            _clean_attributes(tag)

    return str(soup)
