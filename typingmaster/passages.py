"""Built-in practice passages and the fetch-with-fallback helper used by the UI."""

import logging
import random

import requests

from .config import DEFAULT_SOURCES, FETCH_TIMEOUT, SERVICE_URL
from .language_utils import normalize_language
from .passage_fetcher import fetch_passage

logger = logging.getLogger(__name__)

ENGLISH_PASSAGES = [
    "The quick brown fox jumps over the lazy dog. This pangram contains every letter of the alphabet at least once. It has been used for testing typewriters and computer keyboards since the late 19th century. The phrase is also used in font displays and design mockups.",
    "Programming is the art of telling another human what one wants the computer to do. Code is read more often than it is written, so it's important to write clear and maintainable code. Good programmers write code that humans can understand, not just machines.",
    "The beauty of nature never fails to inspire us. From towering mountains to gentle streams, from vast oceans to tiny flowers, every element of nature has its own unique charm. Taking time to appreciate the natural world around us can bring peace and perspective to our busy lives.",
    "Learning is a lifelong journey that never truly ends. Every experience, whether success or failure, teaches us valuable lessons. The key is to remain curious, stay humble, and never stop asking questions. Knowledge grows when it is shared with others.",
    "Technology has transformed the way we live, work, and communicate. The internet connects billions of people across the globe, enabling instant communication and access to information. As we move forward, it's important to use technology wisely and maintain our human connections.",
]

JAPANESE_PASSAGES = [
    "春になると、川沿いの桜並木には毎年たくさんの人が集まります。満開の花の下でお弁当を広げ、家族や友人とゆっくり過ごす時間は、日本の季節を感じる大切なひとときです。",
    "毎日少しずつ練習を続けることが、上達へのいちばんの近道です。最初はゆっくりでも構いません。正確に打つことを意識すれば、速さは後から自然についてきます。",
    "図書館は静かに本を読むだけの場所ではありません。最近では講座やイベントが開かれ、地域の人々が集まって学び合う交流の場としても利用されています。",
    "朝の電車は通勤や通学の人でとても混雑します。それでも多くの人は音楽を聴いたり本を読んだりして、目的地に着くまでの時間を上手に過ごしています。",
    "新しい言葉を覚えるときは、声に出して読んでみるのが効果的です。耳と口を同時に使うことで記憶に残りやすくなり、実際の会話でも自然に使えるようになります。",
]

PASSAGES = {
    "english": ENGLISH_PASSAGES,
    "japanese": JAPANESE_PASSAGES,
}


def random_passage(language, rng=None):
    """Return a random built-in passage for the language class"""
    rng = rng or random
    return rng.choice(PASSAGES[normalize_language(language)])


def get_passage_source(language):
    return DEFAULT_SOURCES[normalize_language(language)]


def request_passage(service_url, url, language, session=None):
    """Ask a running passage service for a passage.

    Mirrors fetch_passage(): returns a dict with success, text and error.
    """
    session = session or requests.Session()
    endpoint = service_url.rstrip("/") + "/api/fetch-text"
    try:
        response = session.post(endpoint, json={"url": url, "language": language},
                                timeout=FETCH_TIMEOUT)
        data = response.json()
        if response.status_code == 200:
            return {"success": True, "text": data.get("text"), "error": None}
        return {"success": False, "text": None,
                "error": data.get("error") or f"API error: {response.status_code}"}
    except Exception as e:
        logger.exception("Passage service request to %s failed", endpoint)
        return {"success": False, "text": None, "error": str(e)}


def load_news_passage(language, url=None, rng=None, service_url=None, session=None):
    """Fetch a news passage, falling back to a built-in one.

    Returns (text, warning). warning is None when the fetched passage is used,
    otherwise a message describing why the built-in passage was substituted.
    """
    language = normalize_language(language)
    url = url or get_passage_source(language)
    service_url = service_url or SERVICE_URL

    if service_url:
        result = request_passage(service_url, url, language, session=session)
    else:
        result = fetch_passage(url, language, session=session, rng=rng)

    if result["success"] and result["text"]:
        return result["text"], None

    if not result["success"]:
        warning = f"Could not fetch text ({result['error']}), using a built-in passage"
    else:
        warning = "No suitable paragraph found on the page, using a built-in passage"
    logger.warning(warning)
    return random_passage(language, rng=rng), warning
