"""Centralized prompt templates for survey analysis."""

from typing import Optional


class Prompts:
    """Collection of all prompt templates used in analysis."""

    @staticmethod
    def system_prompt() -> str:
        """System message sent with every analysis request."""
        return (
            "You are a senior qualitative research analyst. "
            "Respond only with JSON that matches the provided schema. "
            "Write findings in the same language as the survey answers."
        )

    @staticmethod
    def survey_analysis_prompt(
        survey_text: str,
        question_list: Optional[str] = None,
        min_modules: int = 3,
        max_modules: int = 4,
        max_quotes: int = 3
    ) -> str:
        """Create prompt for full qualitative analysis of a survey."""

        # Build question context
        context_section = ""
        if question_list and question_list.strip():
            context_section = f"\nCONTEXT - survey questions:\n{question_list.strip()}\n"

        return f"""Perform an in-depth qualitative and quantitative analysis of the survey responses below.
{context_section}
INPUT FORMAT:
Responses are grouped into question blocks separated by lines like "--- Q1: question text ---".
Each answer line starts with a bracketed user identifier, e.g. "[User 1]" or "[A2]".

TASKS:
1. coreConclusions
   - overallConclusion: one paragraph summarising the most important findings.
   - logicalModules: merge the findings into {min_modules}-{max_modules} logical modules based on how the
     questions relate (e.g. situation -> cause -> impact, or need -> experience -> suggestion),
     not a per-question list. Each module has a title and content.
   - actionableInsights: 4-6 concrete, strategic recommendations.
   - logicDiagramMermaid: a Mermaid flowchart (graph TD or graph LR) showing 1-3 core paths
     between questions or findings. Do not use markdown code fences. Wrap node labels
     containing non-ASCII or special characters in double quotes, e.g. A["pain point"] --> B["churn"].

2. questionInsights
   - For each question block extract 3-5 core points with an approximate percentage.
   - For each core point quote 1-{max_quotes} of the most representative answers verbatim
     (no paraphrasing), preferring detailed and expressive answers from different users
     over the first answers listed. Mark each quote's source with its user identifier.

3. userClusters
   - Group respondents into 3-4 clusters and list their identifiers in userIds.

OUTPUT:
Follow the JSON schema strictly.

SURVEY DATA:
\"\"\"
{survey_text}
\"\"\""""
