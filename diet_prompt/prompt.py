"""
Before/after accounting for a completion prompt.

Builds the original prompt and (unless compression is "none") its compressed
form, both bound to the same model tokenizer, so a caller can compare token
counts and decide which text to send.

    acct = build("gpt-3.5-turbo", "Hey, this is an example request to test out DietPrompt.")
    acct.original.tokens_count()
    acct.compressed.tokens_count()
    acct.completion_request()         # {"model": ..., "prompt": "Hey example request test DietPrompt"}
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from .compress import CompressionStrategy, compress
from .errors import InvalidInputError, MissingFieldError
from .stopwords import DEFAULT_LANGUAGE, get_stopwords
from .tokenizer import count_tokens, encoding_name, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prompt:
    """One side of the comparison: a prompt text bound to a model."""
    model: str
    text: str

    def tokens_count(self) -> int:
        return count_tokens(self.model, self.text)

    def tokens(self) -> list:
        return tokenize(self.model, self.text)

    def estimated_prompt_cost(self) -> int:
        """Character length of the prompt. A cheap proxy, not real pricing."""
        return len(self.text)

    def get_prompt(self) -> str:
        return self.text



def _savings_pct(original_tokens: int, compressed_tokens: int) -> float:
    if not original_tokens:
        return 0.0
    return round((1 - compressed_tokens / original_tokens) * 100, 1)


class PromptAccounting:
    """Original and (optionally) compressed prompt for one completion request.

    Construction validates the request and either succeeds completely or
    raises MissingFieldError, InvalidInputError or UnsupportedModelError.
    Both sides, the strategy and the encoding are read-only afterwards.
    """

    def __init__(self, model: str, prompt: str,
                 strategy=CompressionStrategy.DEFAULT,
                 language: str = DEFAULT_LANGUAGE, request: dict = None):
        if prompt is None or prompt == "":
            raise MissingFieldError("prompt")
        if model is None or model == "":
            raise MissingFieldError("model")
        if not isinstance(prompt, str):
            raise InvalidInputError(f"Prompt must be a string, got {type(prompt).__name__}")

        self._strategy = CompressionStrategy(strategy)
        self._encoding = encoding_name(model)
        self._request = dict(request or {})

        self._original = Prompt(model, prompt)
        self._compressed: Optional[Prompt] = None
        if self._strategy is not CompressionStrategy.NONE:
            text = compress(prompt, self._strategy, stopwords=get_stopwords(language))
            self._compressed = Prompt(model, text)
            logger.debug(
                "Compressed prompt for %s (%s): %d -> %d chars",
                model, self._encoding, len(prompt), len(text),
            )

    @classmethod
    def from_request(cls, request: Mapping, strategy=CompressionStrategy.DEFAULT,
                     language: str = DEFAULT_LANGUAGE):
        """Build from an OpenAI-style completion request mapping."""
        if request is None:
            raise MissingFieldError("request")
        if not isinstance(request, Mapping):
            raise InvalidInputError(f"Request must be a mapping, got {type(request).__name__}")
        return cls(request.get("model"), request.get("prompt"),
                   strategy=strategy, language=language, request=request)

    @property
    def original(self) -> Prompt:
        return self._original

    @property
    def compressed(self) -> Optional[Prompt]:
        """None when the strategy is "none"."""
        return self._compressed

    @property
    def strategy(self) -> CompressionStrategy:
        return self._strategy

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def model(self) -> str:
        return self._original.model

    def prompt_to_send(self) -> str:
        """Compressed text when there is one, else the original."""
        side = self._compressed if self._compressed is not None else self._original
        return side.get_prompt()

    def completion_request(self) -> dict:
        """Copy of the request with `prompt` set to the text to send."""
        request = dict(self._request)
        request["model"] = self.model
        request["prompt"] = self.prompt_to_send()
        return request

    def tokens_saved(self) -> int:
        if self._compressed is None:
            return 0
        return self._original.tokens_count() - self._compressed.tokens_count()

    def savings_pct(self) -> float:
        if self._compressed is None:
            return 0.0
        return _savings_pct(self._original.tokens_count(), self._compressed.tokens_count())

    def summary(self) -> dict:
        """Token and character counts for both sides, plus savings."""
        orig_tokens = self._original.tokens_count()
        stats = {
            "model": self.model,
            "encoding": self._encoding,
            "strategy": self._strategy.value,
            "original_tokens": orig_tokens,
            "original_cost": self._original.estimated_prompt_cost(),
            "compressed_tokens": None,
            "compressed_cost": None,
            "tokens_saved": 0,
            "savings_pct": 0.0,
        }
        if self._compressed is not None:
            comp_tokens = self._compressed.tokens_count()
            stats.update(
                compressed_tokens=comp_tokens,
                compressed_cost=self._compressed.estimated_prompt_cost(),
                tokens_saved=orig_tokens - comp_tokens,
                savings_pct=_savings_pct(orig_tokens, comp_tokens),
            )
        return stats

    def __repr__(self):
        return (f"PromptAccounting(model={self.model!r}, strategy={self._strategy.value!r}, "
                f"compressed={self._compressed is not None})")


def build(model: str, prompt: str, strategy=CompressionStrategy.DEFAULT,
          language: str = DEFAULT_LANGUAGE) -> PromptAccounting:
    """Build a before/after accounting for `prompt` under `model`'s tokenizer."""
    return PromptAccounting(model, prompt, strategy=strategy, language=language)
