"""Plaintext extraction from fetched report pages."""

import structlog
from bs4 import BeautifulSoup

logger = structlog.get_logger()

# Shorter <pre> content means the report block is empty or mis-detected
MIN_PRE_LENGTH = 100


def extract_text(html: str) -> str:
    """Isolate the monospace report body from an HTML page.

    Prefers the text of ``<pre>`` blocks, then the visible document text,
    and finally the raw input. Never raises; downstream parsers report what
    they could not find.

    Args:
        html: Fetched page content

    Returns:
        Report plaintext
    """
    soup = BeautifulSoup(html, "html.parser")

    if soup.find() is None:
        logger.debug("extract_text_no_markup", length=len(html))
        return html

    pre_text = "".join(pre.get_text() for pre in soup.find_all("pre"))
    if len(pre_text) >= MIN_PRE_LENGTH:
        logger.debug("extract_text_pre_block", length=len(pre_text))
        return pre_text

    root = soup.body or soup
    body_text = root.get_text()
    if body_text.strip():
        logger.debug(
            "extract_text_fallback_body",
            pre_length=len(pre_text),
            length=len(body_text),
        )
        return body_text

    logger.warning("extract_text_fallback_raw", length=len(html))
    return html
