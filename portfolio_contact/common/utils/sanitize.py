# portfolio_contact/common/utils/sanitize.py

# Order matters: "&" goes first so entities produced later are not re-escaped.
_HTML_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(unsafe: str) -> str:
    """Escape the five HTML-significant characters of user supplied text."""
    for char, entity in _HTML_REPLACEMENTS:
        unsafe = unsafe.replace(char, entity)
    return unsafe


def format_message_html(message: str) -> str:
    """Escape a free-text message and keep its line breaks visible in HTML."""
    return escape_html(message).replace("\n", "<br>")
