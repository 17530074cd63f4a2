"""Main CLI interface for the Survey Analyzer."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from survey_analyzer.core.analyzer import SurveyAnalyzer
from survey_analyzer.core.normalizer import normalize
from survey_analyzer.core.serializer import build_question_list, serialize
from survey_analyzer.config.settings import Settings
from survey_analyzer.services.data_loader import DataLoader
from survey_analyzer.services.report_generator import ReportGenerator
from survey_analyzer.exceptions import SurveyAnalyzerError
from survey_analyzer.models.analysis_result import AnalysisResult
from survey_analyzer.models.survey import LayoutKind
from survey_analyzer.samples import SAMPLE_QUESTION_LIST, SAMPLE_SURVEY_TEXT
from survey_analyzer.utils.validators import validate_input_file

LAYOUT_CHOICES = [layout.value for layout in LayoutKind]


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None):
    """Setup logging configuration."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Survey Analyzer - AI-powered qualitative survey analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a sheet where each row is a question
  survey-analyzer ingest survey.xlsx --layout rows_are_questions -o survey.txt

  # Analyze canonical text
  survey-analyzer analyze survey.txt --questions questions.txt -o result.json

  # Ingest and analyze in one step with reports
  survey-analyzer run survey.csv --layout rows_are_users --report
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Ingest command
    ingest_parser = subparsers.add_parser('ingest', help='Convert a spreadsheet to canonical text')
    ingest_parser.add_argument('input_file', help='Input file path (.xlsx, .csv, .tsv)')
    ingest_parser.add_argument('-l', '--layout', choices=LAYOUT_CHOICES,
                               help='Sheet layout (default: DEFAULT_LAYOUT setting)')
    ingest_parser.add_argument('-s', '--sheet', help='Excel sheet name (optional)')
    ingest_parser.add_argument('-o', '--output', help='Write canonical text here instead of stdout')
    ingest_parser.add_argument('--questions-out', help='Write the question list to this file')

    # Analyze command
    analyze_parser = subparsers.add_parser('analyze', help='Analyze canonical survey text')
    analyze_parser.add_argument('text_file', help='Canonical text file ("-" for stdin)')
    analyze_parser.add_argument('-q', '--questions', help='Question list file (optional)')
    analyze_parser.add_argument('-o', '--output', help='Write result JSON here (optional)')
    analyze_parser.add_argument('--report', action='store_true', help='Generate JSON and Excel reports')
    analyze_parser.add_argument('--report-title', default='Survey Analysis Report',
                                help='Title for the report')

    # Run command
    run_parser = subparsers.add_parser('run', help='Ingest a spreadsheet and analyze it')
    run_parser.add_argument('input_file', help='Input file path (.xlsx, .csv, .tsv)')
    run_parser.add_argument('-l', '--layout', choices=LAYOUT_CHOICES,
                            help='Sheet layout (default: DEFAULT_LAYOUT setting)')
    run_parser.add_argument('-s', '--sheet', help='Excel sheet name (optional)')
    run_parser.add_argument('-o', '--output', help='Write result JSON here (optional)')
    run_parser.add_argument('--report', action='store_true', help='Generate JSON and Excel reports')
    run_parser.add_argument('--report-title', default='Survey Analysis Report',
                            help='Title for the report')

    # Sample command
    sample_parser = subparsers.add_parser('sample', help='Print the bundled sample survey')
    sample_parser.add_argument('--questions', action='store_true',
                               help='Print the sample question list instead')

    # Config command
    config_parser = subparsers.add_parser('config', help='Configuration management')
    config_subparsers = config_parser.add_subparsers(dest='config_action')

    config_subparsers.add_parser('show', help='Show current configuration')
    config_subparsers.add_parser('test', help='Test configuration')

    # Global options
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level')
    parser.add_argument('--log-file', help='Log file path')
    parser.add_argument('--env-file', help='Environment file path')

    return parser


def _read_text(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    return Path(path).read_text(encoding='utf-8')


def _print_result_summary(result: AnalysisResult) -> None:
    stats = result.get_summary_statistics()
    print("\n📊 Analysis Summary:")
    print(f"  • Questions analyzed: {stats['questions_analyzed']}")
    print(f"  • Core points: {stats['core_points']}")
    print(f"  • Quotes: {stats['quotes']}")
    print(f"  • User clusters: {stats['user_clusters']}")
    print(f"\n📝 {result.core_conclusions.overall_conclusion}")


def _finish_analysis(args, analyzer: SurveyAnalyzer, result: AnalysisResult) -> None:
    _print_result_summary(result)

    if args.output:
        analyzer.report_generator.save_json(result, args.output)
        print(f"\n✅ Result saved to: {args.output}")

    if args.report:
        report_files = analyzer.generate_report(result, args.report_title)
        print("\nReports generated:")
        for report_type, file_path in report_files.items():
            print(f"  • {report_type.capitalize()}: {file_path}")


def command_ingest(args, settings: Settings):
    """Handle ingest command."""
    is_valid, error_msg = validate_input_file(args.input_file)
    if not is_valid:
        print(f"❌ Input validation failed: {error_msg}")
        return 1

    # Ingestion never talks to the model, so credentials are not validated here
    try:
        layout = LayoutKind(args.layout or settings.default_layout)
        matrix = DataLoader(settings).load_matrix(args.input_file, sheet_name=args.sheet)
        question_set = normalize(matrix, layout)
    except (SurveyAnalyzerError, ValueError) as e:
        print(f"❌ Ingestion failed: {str(e)}")
        return 1

    text = serialize(question_set)
    writer = ReportGenerator(settings.output_dir)
    if args.output:
        writer.save_text(text, args.output)
        print(f"✅ {len(question_set)} questions, {question_set.answer_count()} answers written to {args.output}")
    else:
        sys.stdout.write(text)

    if args.questions_out:
        writer.save_text(build_question_list(question_set), args.questions_out)

    return 0


def command_analyze(args, settings: Settings):
    """Handle analyze command."""
    try:
        text = _read_text(args.text_file)
        question_list = _read_text(args.questions) if args.questions else None
    except OSError as e:
        print(f"❌ Could not read input: {str(e)}")
        return 1

    async def _run():
        analyzer = SurveyAnalyzer(settings)
        try:
            result = await analyzer.analyze_text(text, question_list)
            _finish_analysis(args, analyzer, result)
        finally:
            await analyzer.close()

    print("🔍 Analyzing survey responses...")
    try:
        asyncio.run(_run())
    except SurveyAnalyzerError as e:
        print(f"❌ Analysis failed ({e.kind}): {str(e)}")
        return 1
    except Exception as e:
        print(f"❌ Analysis failed: {str(e)}")
        logging.error(f"Analysis error: {str(e)}", exc_info=True)
        return 1

    print("\n🎉 Analysis completed successfully!")
    return 0


def command_run(args, settings: Settings):
    """Handle run command."""
    is_valid, error_msg = validate_input_file(args.input_file)
    if not is_valid:
        print(f"❌ Input validation failed: {error_msg}")
        return 1

    async def _run():
        analyzer = SurveyAnalyzer(settings)
        try:
            ingestion, result = await analyzer.analyze_file(
                args.input_file,
                layout=args.layout,
                sheet_name=args.sheet
            )
            print(f"📥 Ingested {len(ingestion.question_set)} questions, "
                  f"{ingestion.question_set.answer_count()} answers")
            _finish_analysis(args, analyzer, result)
        finally:
            await analyzer.close()

    print(f"Starting analysis of {args.input_file}...")
    try:
        asyncio.run(_run())
    except SurveyAnalyzerError as e:
        print(f"❌ Analysis failed ({e.kind}): {str(e)}")
        return 1
    except Exception as e:
        print(f"❌ Analysis failed: {str(e)}")
        logging.error(f"Analysis error: {str(e)}", exc_info=True)
        return 1

    print("\n🎉 Analysis completed successfully!")
    return 0


def command_sample(args):
    """Handle sample command."""
    if args.questions:
        print(SAMPLE_QUESTION_LIST)
    else:
        sys.stdout.write(SAMPLE_SURVEY_TEXT)
    return 0


def command_config(args, settings: Settings):
    """Handle config command."""
    if args.config_action == 'show':
        print("⚙️  Current Configuration:")
        print(f"  • OpenAI Endpoint: {settings.azure_openai_endpoint}")
        print(f"  • Deployment Name: {settings.azure_openai_deployment_name}")
        print(f"  • API Version: {settings.azure_api_version}")
        print(f"  • Max Tokens: {settings.max_tokens}")
        print(f"  • API Temperature: {settings.api_temperature}")
        print(f"  • Max Retries: {settings.openai_max_retries}")
        print(f"  • Default Layout: {settings.default_layout}")
        print(f"  • Output Directory: {settings.output_dir}")
        return 0

    elif args.config_action == 'test':
        print("🧪 Testing configuration...")
        try:
            settings.validate()
            print("✅ Configuration is valid!")
            return 0
        except Exception as e:
            print(f"❌ Configuration error: {str(e)}")
            return 1

    return 0


def main(argv=None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(args.log_level, args.log_file)

    # Show help if no command specified
    if not args.command:
        parser.print_help()
        return 0

    if args.command == 'sample':
        return command_sample(args)

    try:
        # Load settings
        settings = Settings.from_env(args.env_file)

        # Route to appropriate command handler
        if args.command == 'ingest':
            return command_ingest(args, settings)
        elif args.command == 'analyze':
            return command_analyze(args, settings)
        elif args.command == 'run':
            return command_run(args, settings)
        elif args.command == 'config':
            return command_config(args, settings)
        else:
            print(f"Unknown command: {args.command}")
            return 1

    except Exception as e:
        print(f"❌ Error: {str(e)}")
        logging.error(f"Main error: {str(e)}", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
