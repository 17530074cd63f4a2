"""External service integrations."""

from .openai_client import OpenAIClient
from .data_loader import DataLoader
from .report_generator import ReportGenerator

__all__ = ["OpenAIClient", "DataLoader", "ReportGenerator"]
