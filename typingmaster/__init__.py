"""
Typing Master - typing practice with live speed and accuracy feedback
Passages come from a built-in list or are scraped from a news page.
"""

__version__ = "0.1.0"

# Import all the necessary modules and expose their functionality
from .language_utils import *
from .session import *
from .passage_fetcher import *
from .passages import *

__all__ = [
    # Language utilities
    'SUPPORTED_LANGUAGES',
    'normalize_language',
    'contains_japanese',
    'display_width',

    # Typing session
    'TypingSession',
    'classify_characters',
    'IDLE',
    'ACTIVE',
    'COMPLETE',

    # Passage fetcher
    'PassageFetchError',
    'fetch_passage',
    'extract_passage',
    'truncate_passage',

    # Passages
    'ENGLISH_PASSAGES',
    'JAPANESE_PASSAGES',
    'random_passage',
    'load_news_passage',
]
