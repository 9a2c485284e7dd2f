from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OutputId(str, Enum):
    """Analysis outputs a client can request, in canonical prompt order."""

    TRANSLATION = "translation"
    SUMMARY = "summary"
    KEY_POINTS = "key_points"
    TODOS = "todos"
    CROSS_REFERENCE = "cross_reference"
    GENERATE_TEMPLATE = "generate_template"


DEPARTMENTS: tuple[str, ...] = ("Finance", "Compliance", "Operations", "HR", "Board", "IT")
UNASSIGNED_DEPARTMENT = "Unassigned"
CONFIDENCE_LEVELS: tuple[str, ...] = ("low", "medium", "high")

# Outputs that read the cross documents.
CROSS_OUTPUTS = frozenset({OutputId.CROSS_REFERENCE, OutputId.GENERATE_TEMPLATE})

# Decoded model reply, untrusted and schema-less.
AnalysisResult = Any


def wants_cross_documents(outputs: Iterable[OutputId]) -> bool:
    return any(output in CROSS_OUTPUTS for output in outputs)


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded file as received from the client."""

    data: bytes
    filename: str
    mime_type: str = ""

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class AnalysisRequest:
    """Everything one analysis needs. ``outputs`` holds raw client values."""

    main_file: UploadedFile | None
    target_language: str
    outputs: list[str]
    cross_files: list[UploadedFile] = field(default_factory=list)


@dataclass(frozen=True)
class SkippedFile:
    """A cross file that contributed no text to the prompt."""

    position: int
    filename: str
    reason: str


@dataclass(frozen=True)
class AnalysisOutcome:
    """Decoded result plus the cross files left out of the prompt."""

    result: AnalysisResult
    skipped_cross_files: list[SkippedFile] = field(default_factory=list)
