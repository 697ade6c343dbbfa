from __future__ import annotations

from dataclasses import dataclass
import logging
import re

import requests


logger = logging.getLogger(__name__)

WIKI_RANDOM_SUMMARY_URL = "https://en.wikipedia.org/api/rest_v1/page/random/summary"


@dataclass(frozen=True)
class Article:
    title: str
    url: str
    text: str


def _clean_text(text: str) -> str:
    text = re.sub(r"\[\d+\]", "", text)
    return re.sub(r"\s+", " ", text).strip()


def _is_ascii(text: str) -> bool:
    try:
        text.encode("ascii")
        return True
    except UnicodeEncodeError:
        return False


def _clip_to_word(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    clipped = text[:max_chars]
    # Drop the partial last word so the passage has no half-typed token.
    if " " in clipped and not text[max_chars].isspace():
        clipped = clipped.rsplit(" ", 1)[0]
    return clipped.rstrip()


def fetch_random_passage(
    min_chars: int = 300,
    max_chars: int = 1200,
    tries: int = 5,
) -> Article:
    """Fetch a random English Wikipedia summary to use as a typing passage.

    Raises ``requests.RequestException`` on network failure and ``LookupError``
    when no usable summary came back in ``tries`` attempts.
    """
    last_article = None
    for attempt in range(1, tries + 1):
        response = requests.get(
            WIKI_RANDOM_SUMMARY_URL,
            timeout=8,
            allow_redirects=True,
            headers={
                "User-Agent": "word-typing-test/0.1 (python requests)",
                "Accept": "application/json",
            },
        )
        response.raise_for_status()
        data = response.json()
        text = _clean_text(data.get("extract") or "")
        title = data.get("title") or "Unknown Title"
        url = (
            data.get("content_urls", {})
            .get("desktop", {})
            .get("page", "https://en.wikipedia.org")
        )

        if not text or not _is_ascii(text):
            logger.debug("Attempt %d: skipping unusable summary %r", attempt, title)
            continue

        last_article = Article(title=title, url=url, text=_clip_to_word(text, max_chars))
        if len(last_article.text) >= min_chars:
            break

    if last_article is None:
        raise LookupError(f"No usable Wikipedia summary after {tries} attempts")

    logger.info("Fetched passage %r (%d chars)", last_article.title, len(last_article.text))
    return last_article
