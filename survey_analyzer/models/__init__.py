"""Data models and structures."""

from .survey import Answer, LayoutKind, QuestionBlock, QuestionSet
from .analysis_result import AnalysisResult

__all__ = ["Answer", "LayoutKind", "QuestionBlock", "QuestionSet", "AnalysisResult"]
