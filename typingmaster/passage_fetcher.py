"""Fetch a short practice passage from a live news page."""

import logging
import random
import re

import requests
from bs4 import BeautifulSoup

from .config import FETCH_TIMEOUT, MAX_CANDIDATES, MAX_PASSAGE_LENGTH, MIN_SENTENCE_CUT, USER_AGENT
from .language_utils import contains_japanese, normalize_language

logger = logging.getLogger(__name__)

PARAGRAPH_PATTERN = re.compile(r'<p[^>]*>(.*?)</p>', re.IGNORECASE)
# Paragraphs without nested tags that carry at least one Japanese character
JAPANESE_PARAGRAPH_PATTERN = re.compile(
    r'<p[^>]*>([^<]*[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF][^<]*)</p>',
    re.IGNORECASE,
)

QUOTE_TABLE = str.maketrans({
    "“": '"',  # LEFT DOUBLE QUOTATION MARK
    "”": '"',  # RIGHT DOUBLE QUOTATION MARK
    "‘": "'",  # LEFT SINGLE QUOTATION MARK
    "’": "'",  # RIGHT SINGLE QUOTATION MARK
})


class PassageFetchError(Exception):
    """Raised when the source page could not be retrieved."""


def strip_tags(fragment: str) -> str:
    return BeautifulSoup(fragment, "html.parser").get_text().strip()


def extract_candidates(html: str, language: str) -> list:
    """Return up to MAX_CANDIDATES tag-stripped paragraphs in document order"""
    pattern = JAPANESE_PARAGRAPH_PATTERN if language == "japanese" else PARAGRAPH_PATTERN
    matches = [m.group(0) for m in pattern.finditer(html)][:MAX_CANDIDATES]
    return [strip_tags(match) for match in matches]


def filter_candidates(candidates, language: str) -> list:
    if language == "japanese":
        return [text for text in candidates
                if contains_japanese(text) and 20 < len(text) < 200]

    # Skip short fragments, bylines and anything carrying a link
    return [text for text in candidates
            if len(text) > 50 and '@' not in text and 'http' not in text]


def clean_passage(text: str) -> str:
    text = re.sub(r'\s+', ' ', text)
    text = text.translate(QUOTE_TABLE)
    return text.strip()


def truncate_passage(text: str, limit: int = MAX_PASSAGE_LENGTH,
                     min_sentence_cut: int = MIN_SENTENCE_CUT) -> str:
    """Limit text length for typing practice, preferring to end on a sentence"""
    if len(text) <= limit:
        return text

    text = text[:limit].strip()
    last_sentence = max(text.rfind('.'), text.rfind('!'), text.rfind('?'))
    if last_sentence > min_sentence_cut:
        text = text[:last_sentence + 1]
    return text


def extract_passage(html: str, language: str, rng=None):
    """Pick a passage out of raw page markup. Returns None if nothing qualifies."""
    rng = rng or random
    language = normalize_language(language)

    candidates = filter_candidates(extract_candidates(html, language), language)
    if not candidates:
        logger.info("No %s candidates survived filtering", language)
        return None

    chosen = rng.choice(candidates)
    return truncate_passage(clean_passage(chosen))


def download_page(url: str, session=None) -> str:
    session = session or requests.Session()
    response = session.get(url, headers={"User-Agent": USER_AGENT}, timeout=FETCH_TIMEOUT)
    if not 200 <= response.status_code < 300:
        raise PassageFetchError(f"HTTP error! status: {response.status_code}")

    # Servers that omit the charset get ISO-8859-1 from requests, which mangles Japanese
    if response.encoding is None or response.encoding.lower() == "iso-8859-1":
        response.encoding = response.apparent_encoding
    return response.text


def fetch_passage(url: str, language: str, session=None, rng=None) -> dict:
    """Fetch url and extract a practice passage in the given language.

    Single attempt, no retries. Returns a dict with ``success``, ``text`` and
    ``error`` keys. ``success`` is False only on hard failures (transport
    errors, non-success status, parse errors); a page with no usable
    paragraph gives ``success`` True and ``text`` None.
    """
    try:
        logger.info("Fetching %s passage from %s", language, url)
        html = download_page(url, session=session)
        text = extract_passage(html, language, rng=rng)
        return {"success": True, "text": text, "error": None}
    except Exception as e:
        logger.exception("Error fetching text from %s", url)
        return {"success": False, "text": None, "error": f"Failed to fetch text: {e}"}
