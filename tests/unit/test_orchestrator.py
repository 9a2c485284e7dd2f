"""Tests for the analysis pipeline."""

import json
from unittest.mock import MagicMock

import pytest

from doc_analyzer.analysis.exceptions import (
    ConfigurationError,
    EmptyDocumentError,
    FileTooLargeError,
    InputValidationError,
    NonJsonResponseError,
)
from doc_analyzer.analysis.models import AnalysisRequest, OutputId, SkippedFile, UploadedFile
from doc_analyzer.analysis.orchestrator import AnalysisOrchestrator, build_orchestrator
from doc_analyzer.analysis.pipeline import PipelineContext
from doc_analyzer.analysis.prompt_builder import CROSS_DOCUMENTS_HEADER
from doc_analyzer.analysis.steps import ExtractCrossTextStep, ValidateRequestStep
from doc_analyzer.config.settings import Settings
from doc_analyzer.extraction.docx_adapter import DocxAdapter
from doc_analyzer.extraction.exceptions import ExtractionFailedError, UnsupportedFileTypeError
from doc_analyzer.extraction.pdfplumber_adapter import PdfPlumberAdapter
from doc_analyzer.extraction.text_extractor import TextExtractor
from doc_analyzer.llm.exceptions import ProviderError

MAX_SIZE = 1024


def _pdf(name: str = "main.pdf", data: bytes = b"%PDF-main") -> UploadedFile:
    return UploadedFile(data=data, filename=name, mime_type="application/pdf")


def _request(
    outputs: list[str] | None = None,
    cross_files: list[UploadedFile] | None = None,
    main_file: UploadedFile | None = None,
    target_language: str = "English",
) -> AnalysisRequest:
    return AnalysisRequest(
        main_file=main_file if main_file is not None else _pdf(),
        target_language=target_language,
        outputs=outputs if outputs is not None else ["summary"],
        cross_files=cross_files or [],
    )


def _make_orchestrator(
    texts: dict[str, str | Exception] | None = None,
    reply: str = '{"summary": "ok"}',
) -> tuple[AnalysisOrchestrator, MagicMock, MagicMock]:
    """Orchestrator whose extractor maps filenames to text (or raises)."""
    texts = texts if texts is not None else {"main.pdf": "main document text"}

    def _extract(data: bytes, filename: str, mime_type: str) -> str:
        value = texts[filename]
        if isinstance(value, Exception):
            raise value
        return value

    extractor = MagicMock(spec=TextExtractor)
    extractor.extract.side_effect = _extract
    gateway = MagicMock()
    gateway.complete.return_value = reply
    orchestrator = AnalysisOrchestrator(
        extractor=extractor,
        gateway=gateway,
        max_file_size_bytes=MAX_SIZE,
        max_cross_files=2,
    )
    return orchestrator, extractor, gateway


def _prompt(gateway: MagicMock) -> str:
    return gateway.complete.call_args.args[0]


class TestHandleSuccess:
    def test_returns_decoded_result_unchanged(self) -> None:
        reply = {"summary": "ok", "extra_field": [1, 2]}
        orchestrator, _, _ = _make_orchestrator(reply="```json\n" + json.dumps(reply) + "\n```")
        outcome = orchestrator.handle(_request())
        assert outcome.result == reply
        assert outcome.skipped_cross_files == []

    def test_missing_requested_field_is_not_added(self) -> None:
        orchestrator, _, _ = _make_orchestrator(reply='{"summary": "ok"}')
        outcome = orchestrator.handle(_request(outputs=["summary", "key_points"]))
        assert outcome.result == {"summary": "ok"}

    def test_main_text_reaches_prompt(self) -> None:
        orchestrator, _, gateway = _make_orchestrator()
        orchestrator.handle(_request())
        assert "main document text" in _prompt(gateway)

    def test_calls_gateway_once(self) -> None:
        orchestrator, _, gateway = _make_orchestrator()
        orchestrator.handle(_request())
        gateway.complete.assert_called_once()

    def test_target_language_is_trimmed(self) -> None:
        orchestrator, _, gateway = _make_orchestrator()
        orchestrator.handle(_request(outputs=["translation"], target_language="  Spanish "))
        assert "Target language: Spanish\n" in _prompt(gateway)


class TestValidation:
    def test_missing_main_file(self) -> None:
        orchestrator, extractor, gateway = _make_orchestrator()
        request = AnalysisRequest(main_file=None, target_language="English", outputs=["summary"])
        with pytest.raises(InputValidationError, match="Missing file"):
            orchestrator.handle(request)
        extractor.extract.assert_not_called()

    def test_blank_target_language(self) -> None:
        orchestrator, extractor, _ = _make_orchestrator()
        with pytest.raises(InputValidationError, match="targetLanguage"):
            orchestrator.handle(_request(target_language="   "))
        extractor.extract.assert_not_called()

    def test_empty_outputs_fail_before_side_effects(self) -> None:
        orchestrator, extractor, gateway = _make_orchestrator()
        with pytest.raises(InputValidationError, match="at least one output"):
            orchestrator.handle(_request(outputs=[]))
        extractor.extract.assert_not_called()
        gateway.complete.assert_not_called()

    def test_blank_output_values_count_as_empty(self) -> None:
        orchestrator, _, _ = _make_orchestrator()
        with pytest.raises(InputValidationError):
            orchestrator.handle(_request(outputs=["", "  "]))

    def test_unknown_output_is_rejected(self) -> None:
        orchestrator, _, gateway = _make_orchestrator()
        with pytest.raises(InputValidationError, match="Unknown outputs: poem"):
            orchestrator.handle(_request(outputs=["summary", "poem"]))
        gateway.complete.assert_not_called()

    def test_oversized_main_file(self) -> None:
        orchestrator, extractor, _ = _make_orchestrator()
        big = _pdf(data=b"x" * (MAX_SIZE + 1))
        with pytest.raises(FileTooLargeError):
            orchestrator.handle(_request(main_file=big))
        extractor.extract.assert_not_called()

    def test_oversized_cross_file(self) -> None:
        orchestrator, extractor, _ = _make_orchestrator()
        big = _pdf("big.pdf", data=b"x" * (MAX_SIZE + 1))
        with pytest.raises(FileTooLargeError):
            orchestrator.handle(_request(outputs=["cross_reference"], cross_files=[big]))
        extractor.extract.assert_not_called()

    def test_too_many_cross_files(self) -> None:
        orchestrator, _, _ = _make_orchestrator()
        cross = [_pdf(f"c{i}.pdf") for i in range(3)]
        with pytest.raises(InputValidationError, match="Too many cross files"):
            orchestrator.handle(_request(outputs=["cross_reference"], cross_files=cross))

    def test_missing_credential_fails_first(self) -> None:
        orchestrator, extractor, gateway = _make_orchestrator()
        gateway.ensure_configured.side_effect = ConfigurationError("ANTHROPIC_API_KEY is not set")
        with pytest.raises(ConfigurationError):
            orchestrator.handle(_request(outputs=[]))
        extractor.extract.assert_not_called()


class TestMainExtraction:
    def test_unsupported_main_file_fails_before_llm(self) -> None:
        orchestrator, _, gateway = _make_orchestrator(
            texts={"notes.txt": UnsupportedFileTypeError("Unsupported file type")}
        )
        notes = UploadedFile(data=b"hello", filename="notes.txt", mime_type="text/plain")
        with pytest.raises(UnsupportedFileTypeError):
            orchestrator.handle(_request(main_file=notes))
        gateway.complete.assert_not_called()

    def test_main_extraction_failure_is_fatal(self) -> None:
        orchestrator, _, gateway = _make_orchestrator(
            texts={"main.pdf": ExtractionFailedError("broken")}
        )
        with pytest.raises(ExtractionFailedError):
            orchestrator.handle(_request())
        gateway.complete.assert_not_called()

    def test_empty_main_text(self) -> None:
        orchestrator, _, gateway = _make_orchestrator(texts={"main.pdf": ""})
        with pytest.raises(EmptyDocumentError):
            orchestrator.handle(_request())
        gateway.complete.assert_not_called()


class TestCrossExtraction:
    def test_cross_files_ignored_when_not_requested(self) -> None:
        orchestrator, extractor, gateway = _make_orchestrator(
            texts={"main.pdf": "main", "a.pdf": "cross facts"}
        )
        orchestrator.handle(_request(outputs=["summary"], cross_files=[_pdf("a.pdf")]))
        assert extractor.extract.call_count == 1
        assert CROSS_DOCUMENTS_HEADER not in _prompt(gateway)
        assert "cross facts" not in _prompt(gateway)

    def test_cross_text_has_position_headers(self) -> None:
        orchestrator, _, gateway = _make_orchestrator(
            texts={"main.pdf": "main", "a.pdf": "alpha", "b.docx": "beta"}
        )
        orchestrator.handle(
            _request(outputs=["cross_reference"], cross_files=[_pdf("a.pdf"), _pdf("b.docx")])
        )
        assert (
            "--- Cross document 1: a.pdf ---\nalpha\n\n--- Cross document 2: b.docx ---\nbeta"
            in _prompt(gateway)
        )

    def test_failing_cross_file_is_skipped(self) -> None:
        orchestrator, _, gateway = _make_orchestrator(
            texts={"main.pdf": "main", "bad.pdf": ExtractionFailedError("corrupt"), "ok.pdf": "good"}
        )
        outcome = orchestrator.handle(
            _request(outputs=["cross_reference"], cross_files=[_pdf("bad.pdf"), _pdf("ok.pdf")])
        )
        prompt = _prompt(gateway)
        assert "--- Cross document 2: ok.pdf ---\ngood" in prompt
        assert "bad.pdf" not in prompt
        assert outcome.skipped_cross_files == [
            SkippedFile(position=1, filename="bad.pdf", reason="corrupt")
        ]

    def test_unsupported_cross_file_is_skipped(self) -> None:
        orchestrator, _, _ = _make_orchestrator(
            texts={"main.pdf": "main", "a.txt": UnsupportedFileTypeError("nope")}
        )
        outcome = orchestrator.handle(
            _request(
                outputs=["generate_template"],
                cross_files=[UploadedFile(data=b"x", filename="a.txt")],
            )
        )
        assert [s.position for s in outcome.skipped_cross_files] == [1]

    def test_empty_cross_file_is_skipped(self) -> None:
        orchestrator, _, gateway = _make_orchestrator(texts={"main.pdf": "main", "e.pdf": ""})
        outcome = orchestrator.handle(
            _request(outputs=["cross_reference"], cross_files=[_pdf("e.pdf")])
        )
        assert outcome.skipped_cross_files[0].reason == "no extractable text"
        assert _prompt(gateway).endswith(f"{CROSS_DOCUMENTS_HEADER}\n(none provided)")


class TestStepsInIsolation:
    def test_validate_orders_outputs_canonically(self) -> None:
        step = ValidateRequestStep(max_file_size_bytes=MAX_SIZE, max_cross_files=10)
        context = step.run(PipelineContext(request=_request(outputs=["todos", "translation"])))
        assert context.outputs == [OutputId.TRANSLATION, OutputId.TODOS]

    def test_cross_step_collects_every_file(self) -> None:
        extractor = MagicMock(spec=TextExtractor)
        extractor.extract.side_effect = [ExtractionFailedError("bad"), "fine"]
        request = _request(outputs=["cross_reference"], cross_files=[_pdf("1.pdf"), _pdf("2.pdf")])
        context = PipelineContext(request=request, outputs=[OutputId.CROSS_REFERENCE])

        context = ExtractCrossTextStep(extractor).run(context)

        assert [e.ok for e in context.cross_extractions] == [False, True]
        assert context.cross_text == "--- Cross document 2: 2.pdf ---\nfine"


class TestUpstreamFailures:
    def test_provider_error_propagates(self) -> None:
        orchestrator, _, gateway = _make_orchestrator()
        gateway.complete.side_effect = ProviderError("rate limited")
        with pytest.raises(ProviderError):
            orchestrator.handle(_request())

    def test_non_json_reply(self) -> None:
        orchestrator, _, _ = _make_orchestrator(reply="Sorry, I cannot help with that.")
        with pytest.raises(NonJsonResponseError) as exc_info:
            orchestrator.handle(_request())
        assert exc_info.value.details == "Sorry, I cannot help with that."


class TestEndToEndWithRealExtractors:
    def test_pdf_summary_without_cross_section(self, sample_pdf_bytes: bytes) -> None:
        gateway = MagicMock()
        gateway.complete.return_value = '{"summary": "A greeting."}'
        orchestrator = AnalysisOrchestrator(
            extractor=TextExtractor(pdf_extractor=PdfPlumberAdapter(), docx_extractor=DocxAdapter()),
            gateway=gateway,
            max_file_size_bytes=10 * 1024 * 1024,
            max_cross_files=10,
        )
        outcome = orchestrator.handle(
            _request(main_file=_pdf(data=sample_pdf_bytes), outputs=["summary"])
        )
        assert outcome.result == {"summary": "A greeting."}
        prompt = _prompt(gateway)
        assert "Hello PDF World" in prompt
        assert "CROSS DOCUMENTS" not in prompt


class TestBuildOrchestrator:
    def test_builds_from_settings(self) -> None:
        settings = Settings(_env_file=None, llm_provider="example")  # type: ignore[call-arg]
        assert isinstance(build_orchestrator(settings), AnalysisOrchestrator)
