"""JSON schema for the structured analysis returned by the model.

The same schema is sent with every analysis request and used to validate the
response, so it must describe every field of ``AnalysisResult``.
"""

from typing import Any, Dict, List


def _string(description: str = None) -> Dict[str, Any]:
    schema = {"type": "string"}
    if description:
        schema["description"] = description
    return schema


def _string_array() -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}}


def _object(properties: Dict[str, Any], required: List[str] = None) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(required if required is not None else properties),
    }


QUOTE_SCHEMA = _object({
    "text": _string("Verbatim answer text, not paraphrased"),
    "source": _string("User identifier as it appears in brackets, e.g. 'User 1'"),
})

CORE_POINT_SCHEMA = _object({
    "label": _string(),
    "description": _string(),
    "percentage": {"type": "integer"},
    "quotes": {"type": "array", "items": QUOTE_SCHEMA},
})

QUESTION_INSIGHT_SCHEMA = _object({
    "question": _string(),
    "corePoints": {"type": "array", "items": CORE_POINT_SCHEMA},
})

USER_CLUSTER_SCHEMA = _object({
    "name": _string(),
    "description": _string(),
    "percentage": {"type": "integer"},
    "characteristics": _string_array(),
    "userIds": _string_array(),
})

LOGICAL_MODULE_SCHEMA = _object({
    "title": _string(),
    "content": _string(),
})

CORE_CONCLUSIONS_SCHEMA = _object({
    "overallConclusion": _string(),
    "logicalModules": {"type": "array", "items": LOGICAL_MODULE_SCHEMA},
    "actionableInsights": _string_array(),
    "logicDiagramMermaid": _string("Mermaid.js flowchart syntax. No markdown code fences."),
})

ANALYSIS_RESULT_SCHEMA: Dict[str, Any] = _object({
    "coreConclusions": CORE_CONCLUSIONS_SCHEMA,
    "questionInsights": {"type": "array", "items": QUESTION_INSIGHT_SCHEMA},
    "userClusters": {"type": "array", "items": USER_CLUSTER_SCHEMA},
})

SCHEMA_NAME = "survey_analysis"
