from doc_analyzer.analysis.models import AnalysisOutcome, AnalysisRequest
from doc_analyzer.analysis.pipeline import PipelineContext, PipelineStep
from doc_analyzer.analysis.steps import (
    BuildPromptStep,
    CallLlmStep,
    CheckConfigurationStep,
    DecodeResponseStep,
    ExtractCrossTextStep,
    ExtractMainTextStep,
    ValidateRequestStep,
)
from doc_analyzer.config.settings import Settings
from doc_analyzer.extraction.factory import ExtractorFactory
from doc_analyzer.extraction.text_extractor import TextExtractor
from doc_analyzer.llm.factory import LlmClientFactory
from doc_analyzer.llm.gateway import LlmGateway
from doc_analyzer.logging.logger import Log


class AnalysisOrchestrator:
    """Runs one analysis request through the pipeline.

    Pipeline: check config -> validate -> extract main -> extract cross ->
    build prompt -> call LLM -> decode. The first error ends the request.
    """

    def __init__(
        self,
        extractor: TextExtractor,
        gateway: LlmGateway,
        max_file_size_bytes: int,
        max_cross_files: int,
    ) -> None:
        self._steps: list[PipelineStep] = [
            CheckConfigurationStep(gateway),
            ValidateRequestStep(max_file_size_bytes, max_cross_files),
            ExtractMainTextStep(extractor),
            ExtractCrossTextStep(extractor),
            BuildPromptStep(),
            CallLlmStep(gateway),
            DecodeResponseStep(),
        ]

    def handle(self, request: AnalysisRequest) -> AnalysisOutcome:
        main_name = request.main_file.filename if request.main_file else None
        Log.info(
            f"Analyzing '{main_name}' with {len(request.cross_files)} cross files, "
            f"outputs={request.outputs}"
        )
        context = PipelineContext(request=request)
        for step in self._steps:
            context = step.run(context)
        Log.info(f"Analysis of '{main_name}' complete")
        return AnalysisOutcome(
            result=context.result,
            skipped_cross_files=context.skipped_cross_files,
        )


def build_orchestrator(settings: Settings) -> AnalysisOrchestrator:
    """Build an AnalysisOrchestrator with all required adapters."""
    return AnalysisOrchestrator(
        extractor=ExtractorFactory.create(settings),
        gateway=LlmClientFactory.create(settings),
        max_file_size_bytes=settings.max_file_size_bytes,
        max_cross_files=settings.max_cross_files,
    )
