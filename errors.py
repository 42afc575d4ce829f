from __future__ import annotations


class QuizEngineError(Exception):
    """Base class for question-generation failures."""


class InvalidExpression(QuizEngineError, ValueError):
    """Division by zero, non-finite result or malformed arithmetic."""


class ConstraintExhausted(QuizEngineError):
    """A sampler ran out of attempts before satisfying its constraints."""


class GeneratorUnavailable(QuizEngineError, LookupError):
    """No generator is registered for the requested subtopic."""
