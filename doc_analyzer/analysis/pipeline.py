from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from doc_analyzer.analysis.models import AnalysisRequest, AnalysisResult, OutputId, SkippedFile
from doc_analyzer.analysis.prompt_builder import PromptSpec
from doc_analyzer.extraction.exceptions import ExtractionError


@dataclass(frozen=True)
class CrossExtraction:
    """Outcome of extracting one cross file: either text or the error."""

    position: int
    filename: str
    text: str = ""
    error: ExtractionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class PipelineContext:
    request: AnalysisRequest
    outputs: list[OutputId] = field(default_factory=list)
    target_language: str = ""
    main_text: str = ""
    cross_extractions: list[CrossExtraction] = field(default_factory=list)
    cross_text: str = ""
    skipped_cross_files: list[SkippedFile] = field(default_factory=list)
    prompt: PromptSpec | None = None
    raw_response: str = ""
    result: AnalysisResult = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
