"""Report generation for analysis results."""

import os
import logging
from datetime import datetime
from typing import Dict, Optional
import pandas as pd
import json

from ..models.analysis_result import AnalysisResult

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Writes analysis results as JSON and Excel, and canonical text files."""

    def __init__(self, output_dir: str = "output"):
        """Initialize report generator."""
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

    def generate_report(
        self,
        result: AnalysisResult,
        report_title: str = "Survey Analysis Report"
    ) -> Dict[str, str]:
        """
        Generate JSON and Excel reports for a result.

        Returns:
            Dictionary mapping format to file path
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_files = {}

        json_path = os.path.join(self.output_dir, f"analysis_{timestamp}.json")
        self.save_json(result, json_path, report_title)
        report_files["json"] = json_path

        excel_path = os.path.join(self.output_dir, f"analysis_{timestamp}.xlsx")
        self.save_excel(result, excel_path)
        report_files["excel"] = excel_path

        logger.info(f"Generated report files: {list(report_files.keys())}")
        return report_files

    def save_json(
        self,
        result: AnalysisResult,
        file_path: str,
        report_title: Optional[str] = None
    ) -> None:
        """Write the result in its wire shape."""
        data = result.to_dict()
        if report_title:
            data = {
                "title": report_title,
                "generated_timestamp": datetime.now().isoformat(),
                "summary": result.get_summary_statistics(),
                "analysis": data
            }

        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.info(f"JSON report saved to: {file_path}")

    def save_excel(self, result: AnalysisResult, file_path: str) -> None:
        """Write one sheet per result section."""
        conclusions = result.core_conclusions

        with pd.ExcelWriter(file_path, engine='openpyxl') as writer:
            conclusions_df = pd.DataFrame(
                [['Overall Conclusion', conclusions.overall_conclusion]]
                + [[f'Insight {i}', insight] for i, insight in enumerate(conclusions.actionable_insights, 1)]
                + [['Logic Diagram', conclusions.logic_diagram_mermaid]],
                columns=['Item', 'Value']
            )
            conclusions_df.to_excel(writer, sheet_name='Conclusions', index=False)

            modules_df = pd.DataFrame(
                [(m.title, m.content) for m in conclusions.logical_modules],
                columns=['Title', 'Content']
            )
            modules_df.to_excel(writer, sheet_name='Logical Modules', index=False)

            rows = []
            for insight in result.question_insights:
                for point in insight.core_points:
                    quotes = "\n".join(f"[{q.source}] {q.text}" for q in point.quotes)
                    rows.append((insight.question, point.label, point.description, point.percentage, quotes))
            insights_df = pd.DataFrame(
                rows,
                columns=['Question', 'Core Point', 'Description', 'Percentage', 'Quotes']
            )
            insights_df.to_excel(writer, sheet_name='Question Insights', index=False)

            clusters_df = pd.DataFrame(
                [
                    (c.name, c.description, c.percentage, "; ".join(c.characteristics), ", ".join(c.user_ids))
                    for c in result.user_clusters
                ],
                columns=['Cluster', 'Description', 'Percentage', 'Characteristics', 'User IDs']
            )
            clusters_df.to_excel(writer, sheet_name='User Clusters', index=False)

        logger.info(f"Excel report saved to: {file_path}")

    def save_text(self, text: str, file_path: str) -> None:
        """Write canonical survey text or a question list."""
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(text)

        logger.info(f"Text saved to: {file_path}")
