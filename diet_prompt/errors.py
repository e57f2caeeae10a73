"""Error kinds raised while building a prompt accounting session.

All of them are raised synchronously to the immediate caller and are never
retried: everything in this package is local computation.
"""


class DietPromptError(Exception):
    """Base class for every error raised by diet_prompt."""


class MissingFieldError(DietPromptError, ValueError):
    """A required field (prompt or model) is absent."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"'{field_name}' is required")


class InvalidInputError(DietPromptError, TypeError):
    """A field is present but has the wrong type."""


class UnsupportedModelError(DietPromptError, LookupError):
    """No tokenizer mapping exists for the model identifier."""

    def __init__(self, model: str):
        self.model = model
        super().__init__(f"No tokenizer available for model '{model}'")
