"""Main survey analyzer orchestrating all components."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..config.settings import Settings
from ..models.analysis_result import AnalysisResult
from ..models.survey import CellMatrix, LayoutKind, QuestionSet
from ..services.openai_client import OpenAIClient
from ..services.data_loader import DataLoader
from ..services.report_generator import ReportGenerator
from ..utils.token_counter import TokenCounter
from .normalizer import normalize
from .request_builder import AnalysisRequest, build_request
from .serializer import build_question_list, serialize
from .session import AnalysisSession

logger = logging.getLogger(__name__)


@dataclass
class IngestionOutput:
    """Result of turning a sheet into canonical text."""

    question_set: QuestionSet
    text: str
    question_list: str


class SurveyAnalyzer:
    """Main analyzer class orchestrating all components."""

    def __init__(
        self,
        settings: Settings,
        openai_client: Optional[OpenAIClient] = None
    ):
        """Initialize the survey analyzer."""
        self.settings = settings
        self.settings.validate()

        # Core utilities
        self.token_counter = TokenCounter()

        self.openai_client = openai_client or OpenAIClient(
            azure_endpoint=self.settings.azure_openai_endpoint,
            api_key=self.settings.azure_openai_api_key,
            api_version=self.settings.azure_api_version,
            deployment_name=self.settings.azure_openai_deployment_name,
            settings=self.settings
        )

        # Service components
        self.data_loader = DataLoader(settings=self.settings)
        self.report_generator = ReportGenerator(self.settings.output_dir)

        self.session = AnalysisSession()

        logger.info("SurveyAnalyzer initialized successfully")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "SurveyAnalyzer":
        """Create analyzer from environment variables."""
        settings = Settings.from_env(env_file)
        return cls(settings)

    def ingest_matrix(self, matrix: CellMatrix, layout: LayoutKind) -> IngestionOutput:
        """Normalize a cell matrix and render canonical text."""
        question_set = normalize(matrix, layout)
        return IngestionOutput(
            question_set=question_set,
            text=serialize(question_set),
            question_list=build_question_list(question_set)
        )

    def ingest_file(
        self,
        input_file: str,
        layout: Optional[LayoutKind] = None,
        sheet_name: Optional[str] = None
    ) -> IngestionOutput:
        """
        Load a spreadsheet and render it as canonical text.

        Args:
            input_file: Path to input file (Excel, CSV, TSV)
            layout: Sheet layout, defaults to the configured layout
            sheet_name: Excel sheet name (optional)

        Returns:
            IngestionOutput with question set, text and question list
        """
        layout = LayoutKind(layout or self.settings.default_layout)
        logger.info(f"Ingesting {input_file} as {layout.value}")

        matrix = self.data_loader.load_matrix(input_file, sheet_name=sheet_name)
        return self.ingest_matrix(matrix, layout)

    def build_request(self, text: str, question_list: Optional[str] = None) -> AnalysisRequest:
        """Build an analysis request and warn when it may not fit the context window."""
        request = build_request(text, question_list, token_counter=self.token_counter)
        if request.estimated_tokens + self.settings.max_tokens > self.settings.context_token_limit:
            logger.warning(
                f"Request of ~{request.estimated_tokens} tokens plus {self.settings.max_tokens} "
                f"output tokens may exceed the {self.settings.context_token_limit} token context"
            )
        cost = self.token_counter.estimate_cost(request.estimated_tokens, self.settings.max_tokens)
        logger.debug(f"Estimated worst-case request cost: ${cost['estimated_cost_usd']}")
        return request

    async def analyze_text(self, text: str, question_list: Optional[str] = None) -> AnalysisResult:
        """Analyze canonical (possibly hand-edited) survey text."""
        request = self.build_request(text, question_list)
        return await self.session.run(request, self.openai_client.analyze)

    async def analyze_file(
        self,
        input_file: str,
        layout: Optional[LayoutKind] = None,
        sheet_name: Optional[str] = None
    ) -> Tuple[IngestionOutput, AnalysisResult]:
        """Ingest a spreadsheet and analyze it in one step."""
        ingestion = self.ingest_file(input_file, layout, sheet_name)
        result = await self.analyze_text(ingestion.text, ingestion.question_list)
        return ingestion, result

    def cancel(self) -> bool:
        """Cancel the outstanding analysis attempt, if any."""
        return self.session.cancel()

    def generate_report(
        self,
        result: Optional[AnalysisResult] = None,
        report_title: str = "Survey Analysis Report"
    ) -> Dict[str, str]:
        """Write reports for a result, defaulting to the last successful one."""
        result = result or self.session.result
        if result is None:
            raise ValueError("No analysis result available. Run an analysis first.")
        return self.report_generator.generate_report(result, report_title)

    async def close(self) -> None:
        await self.openai_client.close()
