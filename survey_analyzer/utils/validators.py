"""Simple validation utilities."""

import os
from typing import List, Tuple
from pathlib import Path

SUPPORTED_EXTENSIONS = ['.xlsx', '.csv', '.tsv']


def validate_input_file(file_path: str) -> Tuple[bool, str]:
    """
    Validate input file exists, has a supported format and is not empty.

    Args:
        file_path: Path to the input file

    Returns:
        Tuple of (is_valid, error_message)
    """
    # Check if file exists
    if not os.path.exists(file_path):
        return False, f"Input file not found: {file_path}"

    if not os.path.isfile(file_path):
        return False, f"Input path is not a file: {file_path}"

    # Check file extension
    file_ext = Path(file_path).suffix.lower()
    if file_ext not in SUPPORTED_EXTENSIONS:
        return False, f"Unsupported file format: {file_ext}. Use {', '.join(SUPPORTED_EXTENSIONS)}"

    if os.path.getsize(file_path) == 0:
        return False, f"Input file is empty: {file_path}"

    return True, "File validation successful"


def validate_required_settings(api_key: str, endpoint: str, deployment: str) -> List[str]:
    """Validate required Azure OpenAI settings."""
    errors = []

    if not api_key:
        errors.append("AZURE_OPENAI_API_KEY is required")

    if not endpoint:
        errors.append("AZURE_OPENAI_ENDPOINT is required")

    if not deployment:
        errors.append("AZURE_OPENAI_DEPLOYMENT_NAME is required")

    return errors
