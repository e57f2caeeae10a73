"""
diet-prompt: token accounting and lightweight compression for LLM prompts.

Strips punctuation and stopwords (after normalizing "do not") to shrink a
completion prompt, and counts tokens for the original and compressed text
with the target model's own tokenizer.
"""

__version__ = "0.1.0"

from .errors import (
    DietPromptError,
    MissingFieldError,
    InvalidInputError,
    UnsupportedModelError,
)
from .stopwords import STOPWORDS, DEFAULT_LANGUAGE, get_stopwords, load_stopwords
from .tokenizer import count_tokens, tokenize, encoding_for, encoding_name
from .compress import compress, compress_default, CompressionStrategy, PUNCTUATION
from .prompt import build, Prompt, PromptAccounting
