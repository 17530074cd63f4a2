"""Core pipeline: normalization, serialization, requests and responses."""

from .analyzer import SurveyAnalyzer, IngestionOutput
from .normalizer import normalize
from .serializer import serialize, build_question_list
from .request_builder import AnalysisRequest, build_request
from .sanitizer import sanitize, repair_diagram
from .session import AnalysisSession, AnalysisStatus

__all__ = [
    "SurveyAnalyzer", "IngestionOutput", "normalize", "serialize", "build_question_list",
    "AnalysisRequest", "build_request", "sanitize", "repair_diagram",
    "AnalysisSession", "AnalysisStatus",
]
