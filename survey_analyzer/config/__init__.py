"""Configuration management for survey analyzer."""

from .settings import Settings
from .prompts import Prompts
from .schema import ANALYSIS_RESULT_SCHEMA

__all__ = ["Settings", "Prompts", "ANALYSIS_RESULT_SCHEMA"]
