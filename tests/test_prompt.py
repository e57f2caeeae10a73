"""Tests for the before/after prompt accounting."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from concurrent.futures import ThreadPoolExecutor

import pytest

from diet_prompt import (
    build, PromptAccounting, CompressionStrategy,
    InvalidInputError, MissingFieldError, UnsupportedModelError,
)

MODEL = "gpt-3.5-turbo"
EXAMPLE = "Hey, this is an example request to test out DietPrompt."


def test_build_default():
    acct = build(MODEL, EXAMPLE)
    assert acct.strategy is CompressionStrategy.DEFAULT
    assert acct.encoding == "cl100k_base"
    assert acct.original.get_prompt() == EXAMPLE
    assert acct.compressed.get_prompt() == "Hey example request test DietPrompt"
    assert acct.compressed.tokens_count() <= acct.original.tokens_count()
    assert acct.compressed.estimated_prompt_cost() < acct.original.estimated_prompt_cost()
    assert acct.original.estimated_prompt_cost() == len(EXAMPLE)
    assert len(acct.original.tokens()) == acct.original.tokens_count()
    print(f"✓ test_build_default ({acct.savings_pct()}% savings)")


def test_build_none():
    acct = build(MODEL, EXAMPLE, strategy="none")
    assert acct.compressed is None
    assert acct.prompt_to_send() == EXAMPLE
    assert acct.tokens_saved() == 0
    assert acct.savings_pct() == 0.0
    stats = acct.summary()
    assert stats["compressed_tokens"] is None
    assert stats["strategy"] == "none"
    print("✓ test_build_none")


def test_compressed_side_is_stable():
    a = build(MODEL, EXAMPLE)
    b = build(MODEL, EXAMPLE)
    assert a.compressed == b.compressed
    with pytest.raises(AttributeError):
        a.compressed.text = "changed"
    print("✓ test_compressed_side_is_stable")


def test_summary():
    acct = build(MODEL, EXAMPLE)
    stats = acct.summary()
    assert stats["model"] == MODEL
    assert stats["original_tokens"] == acct.original.tokens_count()
    assert stats["compressed_tokens"] == acct.compressed.tokens_count()
    assert stats["tokens_saved"] == acct.tokens_saved()
    assert stats["savings_pct"] == acct.savings_pct()
    assert stats["tokens_saved"] >= 0
    print("✓ test_summary")


def test_from_request():
    request = {"model": MODEL, "prompt": EXAMPLE, "max_tokens": 64}
    acct = PromptAccounting.from_request(request)
    outgoing = acct.completion_request()
    assert outgoing == {
        "model": MODEL,
        "prompt": "Hey example request test DietPrompt",
        "max_tokens": 64,
    }
    # Caller's request is untouched
    assert request["prompt"] == EXAMPLE
    print("✓ test_from_request")


def test_non_string_prompt():
    with pytest.raises(InvalidInputError):
        build(MODEL, 123)
    with pytest.raises(InvalidInputError):
        PromptAccounting.from_request({"model": MODEL, "prompt": ["a", "b"]})
    print("✓ test_non_string_prompt")


def test_missing_fields():
    with pytest.raises(MissingFieldError) as exc_info:
        build(None, EXAMPLE)
    assert exc_info.value.field_name == "model"
    with pytest.raises(MissingFieldError) as exc_info:
        PromptAccounting.from_request({"prompt": EXAMPLE})
    assert exc_info.value.field_name == "model"
    with pytest.raises(MissingFieldError) as exc_info:
        build(MODEL, None)
    assert exc_info.value.field_name == "prompt"
    with pytest.raises(MissingFieldError):
        build(MODEL, "")
    print("✓ test_missing_fields")


def test_unsupported_model():
    with pytest.raises(UnsupportedModelError):
        build("not-a-real-model", EXAMPLE)
    print("✓ test_unsupported_model")


def test_unknown_language():
    with pytest.raises(LookupError):
        build(MODEL, EXAMPLE, language="klingon")
    # No stopword list is needed when nothing is compressed
    assert build(MODEL, EXAMPLE, strategy="none", language="klingon").compressed is None
    print("✓ test_unknown_language")


def test_accounting_is_read_only():
    """Sides, strategy and encoding cannot be reassigned after construction."""
    acct = build(MODEL, EXAMPLE, strategy="none")
    with pytest.raises(AttributeError):
        acct.compressed = acct.original
    with pytest.raises(AttributeError):
        acct.strategy = "default"
    with pytest.raises(AttributeError):
        acct.original = None
    with pytest.raises(AttributeError):
        acct.encoding = "p50k_base"
    assert acct.compressed is None
    assert acct.strategy is CompressionStrategy.NONE
    print("✓ test_accounting_is_read_only")


def test_from_request_rejects_non_mapping():
    with pytest.raises(MissingFieldError) as exc_info:
        PromptAccounting.from_request(None)
    assert exc_info.value.field_name == "request"
    with pytest.raises(InvalidInputError):
        PromptAccounting.from_request("gpt-3.5-turbo: hello")
    with pytest.raises(InvalidInputError):
        PromptAccounting.from_request([("model", MODEL), ("prompt", EXAMPLE)])
    print("✓ test_from_request_rejects_non_mapping")


def test_savings_match_summary():
    acct = build(MODEL, EXAMPLE)
    stats = acct.summary()
    original = acct.original.tokens_count()
    compressed = acct.compressed.tokens_count()
    assert stats["savings_pct"] == round((1 - compressed / original) * 100, 1)
    assert stats["tokens_saved"] == original - compressed
    print("✓ test_savings_match_summary")


def test_concurrent_sessions():
    """Parallel sessions count the same as serial ones."""
    prompts = [
        EXAMPLE,
        "Do not go gentle into that good night.",
        "I want you to act as an advertiser. You will create a campaign!",
        "Summarize the following article in three bullet points, please.",
    ] * 4

    def counts(prompt):
        acct = build(MODEL, prompt)
        return acct.original.tokens_count(), acct.compressed.tokens_count(), acct.prompt_to_send()

    serial = [counts(p) for p in prompts]
    with ThreadPoolExecutor(max_workers=8) as pool:
        parallel = list(pool.map(counts, prompts))
    assert parallel == serial
    print(f"✓ test_concurrent_sessions ({len(prompts)} sessions)")


if __name__ == "__main__":
    test_build_default()
    test_build_none()
    test_compressed_side_is_stable()
    test_summary()
    test_from_request()
    test_non_string_prompt()
    test_missing_fields()
    test_unsupported_model()
    test_unknown_language()
    test_accounting_is_read_only()
    test_from_request_rejects_non_mapping()
    test_savings_match_summary()
    test_concurrent_sessions()
    print("\n🎉 All tests passed!")
