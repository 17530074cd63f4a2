"""Survey Analysis Framework

Turns survey spreadsheets into canonical text and validated
qualitative analyses produced by Azure OpenAI.
"""

__version__ = "1.0.0"
__author__ = "Survey Analysis Team"

from .core.analyzer import SurveyAnalyzer

__all__ = ["SurveyAnalyzer"]
