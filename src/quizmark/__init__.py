"""quizmark: quiz markdown normalization and answer grading."""

from quizmark.engine.classifier import classify
from quizmark.engine.normalizer import normalize
from quizmark.engine.options import strip_option_prefix

__version__ = "0.1.0"

__all__ = ["classify", "normalize", "strip_option_prefix"]
