"""
Prompt compression strategies.

    none    — passthrough
    default — contraction normalization, punctuation stripping, stopword removal

The default pipeline is lossy and order-sensitive: "do not" becomes "don't"
before punctuation is stripped, so the apostrophe it introduces is removed
again ("dont"). Words are split on single spaces only, so runs of spaces
leave empty words behind that survive the stopword filter.
"""

import re
from enum import Enum

from .stopwords import get_stopwords

PUNCTUATION = frozenset(".,'\"!?;:-")

_DO_NOT = re.compile(r"do not", re.IGNORECASE)


class CompressionStrategy(str, Enum):
    NONE = "none"
    DEFAULT = "default"


def compress_default(text: str, stopwords=None) -> str:
    """Apply contraction, punctuation and stopword reduction to `text`.

    Args:
        text: Prompt text
        stopwords: Words to drop (exact, case-sensitive match).
                   Defaults to the bundled English list.

    Returns:
        The reduced text; never longer than `text`.
    """
    if stopwords is None:
        stopwords = get_stopwords()

    text = _DO_NOT.sub("don't", text)
    text = "".join(ch for ch in text if ch not in PUNCTUATION)
    return " ".join(word for word in text.split(" ") if word not in stopwords)


def compress(text: str, strategy=CompressionStrategy.DEFAULT, stopwords=None) -> str:
    """Compress `text` with the given strategy ("none" or "default")."""
    strategy = CompressionStrategy(strategy)
    if strategy is CompressionStrategy.NONE:
        return text
    return compress_default(text, stopwords=stopwords)
