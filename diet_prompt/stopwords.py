"""
Stopword lists, keyed by language.

Lists are JSON arrays of lowercase words. They are loaded once at import and
exposed through a read-only mapping, so every compression call shares the
same frozensets without copying them.

Format:
    ["i", "me", "my", ...]

Extra lists can be dropped into ./stopword_lists/ (named <language>.json)
or loaded from any path with load_stopwords().
"""

import json
import logging
import os
from types import MappingProxyType

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "english"

_LIST_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "stopword_lists")


def load_stopwords(list_path_or_language: str, search_dirs=None) -> frozenset:
    """Load a stopword list from a JSON file.

    Args:
        list_path_or_language: Either a full file path, or a language name to search for.
        search_dirs: Optional list of directories to search (when using a name).
                     Defaults to ./stopword_lists/ relative to this module.

    Returns:
        frozenset of words, ready to pass as compress(stopwords=...).
    """
    if os.path.isfile(list_path_or_language):
        list_file = list_path_or_language
    else:
        if search_dirs is None:
            search_dirs = [_LIST_DIR]
        list_file = None
        for d in search_dirs:
            candidate = os.path.join(d, f"{list_path_or_language}.json")
            if os.path.isfile(candidate):
                list_file = candidate
                break
        if not list_file:
            raise FileNotFoundError(
                f"Stopword list '{list_path_or_language}' not found in {search_dirs}"
            )

    with open(list_file, "r", encoding="utf-8") as f:
        entries = json.load(f)

    words = frozenset(w for w in entries if isinstance(w, str) and w)
    logger.debug("Loaded %d stopwords from %s", len(words), list_file)
    return words


def _load_bundled():
    lists = {}
    for name in sorted(os.listdir(_LIST_DIR)):
        language, ext = os.path.splitext(name)
        if ext == ".json":
            lists[language] = load_stopwords(os.path.join(_LIST_DIR, name))
    return MappingProxyType(lists)


STOPWORDS = _load_bundled()


def get_stopwords(language: str = DEFAULT_LANGUAGE) -> frozenset:
    """Return the bundled stopword set for a language."""
    try:
        return STOPWORDS[language]
    except KeyError:
        raise LookupError(
            f"No stopword list for language '{language}' (available: {sorted(STOPWORDS)})"
        ) from None
