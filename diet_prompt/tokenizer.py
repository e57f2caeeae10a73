"""
Token counting using the target model's real BPE tokenizer (tiktoken).

Counts are only meaningful against the same encoding, so the encoding is
always chosen from the model identifier; there is no heuristic fallback.

Each call acquires the encoding inside a `with encoding_for(model)` block
and drops it on exit, success or failure. Nothing is carried between calls.
"""

import logging
from contextlib import contextmanager

import tiktoken
from tiktoken.model import encoding_name_for_model

from .errors import InvalidInputError, MissingFieldError, UnsupportedModelError

logger = logging.getLogger(__name__)


def _check_model(model):
    if model is None or model == "":
        raise MissingFieldError("model")
    if not isinstance(model, str):
        raise InvalidInputError(f"Model must be a string, got {type(model).__name__}")


def _check_text(text):
    if not isinstance(text, str):
        raise InvalidInputError(f"Text must be a string, got {type(text).__name__}")


def encoding_name(model: str) -> str:
    """Name of the tiktoken encoding for `model`, without loading its ranks."""
    _check_model(model)
    try:
        return encoding_name_for_model(model)
    except KeyError:
        raise UnsupportedModelError(model) from None


@contextmanager
def encoding_for(model: str):
    """Acquire the encoding for `model` for the duration of a with-block."""
    _check_model(model)
    try:
        encoding = tiktoken.encoding_for_model(model)
    except KeyError:
        raise UnsupportedModelError(model) from None
    try:
        yield encoding
    finally:
        del encoding
        logger.debug("Released %s encoding", model)


def tokenize(model: str, text: str) -> list:
    """Encode `text` into the token ids `model` would see, left to right.

    Special-token markers such as <|endoftext|> are encoded as plain text.
    """
    _check_text(text)
    with encoding_for(model) as enc:
        return enc.encode(text, disallowed_special=())


def count_tokens(model: str, text: str) -> int:
    """Count the tokens `text` costs under `model`'s tokenizer."""
    return len(tokenize(model, text))
