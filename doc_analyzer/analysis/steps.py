from doc_analyzer.analysis.decoder import decode_response
from doc_analyzer.analysis.exceptions import (
    EmptyDocumentError,
    FileTooLargeError,
    InputValidationError,
    NonJsonResponseError,
)
from doc_analyzer.analysis.models import OutputId, SkippedFile, UploadedFile, wants_cross_documents
from doc_analyzer.analysis.pipeline import CrossExtraction, PipelineContext, PipelineStep
from doc_analyzer.analysis.prompt_builder import build_prompt_spec
from doc_analyzer.extraction.exceptions import ExtractionError
from doc_analyzer.extraction.text_extractor import TextExtractor
from doc_analyzer.llm.gateway import LlmGateway
from doc_analyzer.logging.logger import Log


def format_cross_document(position: int, filename: str, text: str) -> str:
    return f"--- Cross document {position}: {filename or 'file'} ---\n{text}"


class CheckConfigurationStep(PipelineStep):
    def __init__(self, gateway: LlmGateway) -> None:
        self._gateway = gateway

    def run(self, context: PipelineContext) -> PipelineContext:
        self._gateway.ensure_configured()
        return context


class ValidateRequestStep(PipelineStep):
    def __init__(self, max_file_size_bytes: int, max_cross_files: int) -> None:
        self._max_file_size_bytes = max_file_size_bytes
        self._max_cross_files = max_cross_files

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        if request.main_file is None:
            raise InputValidationError("Missing file upload")

        target_language = (request.target_language or "").strip()
        if not target_language:
            raise InputValidationError("Missing targetLanguage")

        context.outputs = self._parse_outputs(request.outputs)
        context.target_language = target_language

        if len(request.cross_files) > self._max_cross_files:
            raise InputValidationError(
                f"Too many cross files: {len(request.cross_files)} "
                f"(max {self._max_cross_files})"
            )
        for upload in [request.main_file, *request.cross_files]:
            self._check_size(upload)
        return context

    @staticmethod
    def _parse_outputs(raw_outputs: list[str]) -> list[OutputId]:
        values = [value.strip() for value in raw_outputs if value and value.strip()]
        if not values:
            raise InputValidationError("Select at least one output")
        known = {output.value for output in OutputId}
        unknown = sorted({value for value in values if value not in known})
        if unknown:
            raise InputValidationError(
                f"Unknown outputs: {', '.join(unknown)}. "
                f"Choose from: {', '.join(output.value for output in OutputId)}"
            )
        requested = set(values)
        return [output for output in OutputId if output.value in requested]

    def _check_size(self, upload: UploadedFile) -> None:
        if upload.size > self._max_file_size_bytes:
            raise FileTooLargeError(
                f"File '{upload.filename}' is {upload.size} bytes "
                f"(max {self._max_file_size_bytes})"
            )


class ExtractMainTextStep(PipelineStep):
    def __init__(self, extractor: TextExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        main_file = context.request.main_file
        if main_file is None:
            raise ValueError("Request must be validated before extraction")
        text = self._extractor.extract(main_file.data, main_file.filename, main_file.mime_type)
        if not text:
            raise EmptyDocumentError("Could not extract text from the uploaded file")
        context.main_text = text
        Log.info(f"Extracted {len(text)} chars from main document '{main_file.filename}'")
        return context


class ExtractCrossTextStep(PipelineStep):
    """Best-effort extraction of cross files.

    Every file yields a CrossExtraction; only successes with text reach the
    prompt, the rest are recorded in ``skipped_cross_files``.
    """

    def __init__(self, extractor: TextExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if not wants_cross_documents(context.outputs):
            return context

        context.cross_extractions = [
            self._extract(position, upload)
            for position, upload in enumerate(context.request.cross_files, start=1)
        ]

        parts: list[str] = []
        for extraction in context.cross_extractions:
            if extraction.ok and extraction.text:
                parts.append(
                    format_cross_document(extraction.position, extraction.filename, extraction.text)
                )
                continue
            reason = str(extraction.error) if extraction.error else "no extractable text"
            context.skipped_cross_files.append(
                SkippedFile(
                    position=extraction.position,
                    filename=extraction.filename,
                    reason=reason,
                )
            )
            Log.warning(
                f"Skipping cross document {extraction.position} "
                f"'{extraction.filename}': {reason}"
            )

        context.cross_text = "\n\n".join(parts)
        Log.info(
            f"Using {len(parts)} of {len(context.cross_extractions)} cross documents"
        )
        return context

    def _extract(self, position: int, upload: UploadedFile) -> CrossExtraction:
        try:
            text = self._extractor.extract(upload.data, upload.filename, upload.mime_type)
        except ExtractionError as exc:
            return CrossExtraction(position=position, filename=upload.filename, error=exc)
        return CrossExtraction(position=position, filename=upload.filename, text=text)


class BuildPromptStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.prompt = build_prompt_spec(
            context.outputs,
            context.target_language,
            context.main_text,
            context.cross_text,
        )
        Log.debug(f"Analysis prompt:\n{context.prompt.text}")
        return context


class CallLlmStep(PipelineStep):
    def __init__(self, gateway: LlmGateway) -> None:
        self._gateway = gateway

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.prompt is None:
            raise ValueError("PipelineContext.prompt must be set before calling the LLM")
        context.raw_response = self._gateway.complete(context.prompt.text)
        return context


class DecodeResponseStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        try:
            context.result = decode_response(context.raw_response)
        except NonJsonResponseError as exc:
            Log.error(f"{exc} ({exc.__cause__}); raw reply starts with: {exc.details!r}")
            raise
        return context
