# utils/text_transform.py
import re
import unicodedata

# Letters whose dots can be dropped, mapped to their dotless look-alikes.
# No value is also a key, so applying the map twice changes nothing.
DOTLESS_MAP = {
    # Persian / Arabic
    'ب': 'ٮ', 'پ': 'ٮ', 'ت': 'ٮ', 'ث': 'ٮ', 'ن': 'ں', 'ی': 'ى',
    'ق': 'ٯ', 'ف': 'ڡ', 'ج': 'ح', 'چ': 'ح', 'خ': 'ح', 'ز': 'ر',
    'ژ': 'ر', 'ض': 'ص', 'ظ': 'ط', 'غ': 'ع', 'ذ': 'د', 'ش': 'س',
    'ة': 'ه', 'ي': 'ى',
    # Latin
    'i': 'ı',
    'j': 'ȷ',
    # Punctuation that is only dots
    '.': ' ',
    ':': ' ',
    '·': ' ',
}

_DOTLESS_TABLE = str.maketrans(DOTLESS_MAP)

MARKDOWN_V2_SPECIAL = r"_*[]()~`>#+-=|{}.!"
_MARKDOWN_V2_RE = re.compile("([" + re.escape(MARKDOWN_V2_SPECIAL) + "])")

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def remove_dots(text: str) -> str:
    """
    Strip every dot from text.

    The text is decomposed (NFD) and every combining mark dropped, so
    accents on any script disappear. Letters that carry their dots in the
    base character are then swapped for their dotless forms. Marks are
    stripped before the swap so that a decomposed 'í' ends up as 'ı'
    rather than 'i'. The result is recomposed (NFC), which leaves scripts
    such as Hangul untouched.

    Args:
        text: Input text

    Returns:
        Dotless text
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.category(ch).startswith("M"))
    return unicodedata.normalize("NFC", stripped.translate(_DOTLESS_TABLE))


def has_dots(text: str) -> bool:
    """Return True when remove_dots would change the text."""
    return text != remove_dots(text)


def escape_markdown(text: str) -> str:
    """Escape all MarkdownV2 special characters."""
    return _MARKDOWN_V2_RE.sub(r"\\\1", text)


def escape_markdown_code(text: str) -> str:
    """Escape text for use inside a MarkdownV2 code span."""
    return text.replace("\\", "\\\\").replace("`", "\\`")


def escape_html(text: str) -> str:
    """Escape text for Telegram's HTML parse mode."""
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in text)


def cut_down_text(text: str, limit: int = 100) -> str:
    """
    Shorten text to its first line, at most `limit` characters.

    Appends "..." whenever anything was dropped.
    """
    cut = text.split("\n")[0][:limit]
    if cut != text:
        cut += "..."
    return cut
