"""Defaulted, typed views over an untrusted analysis result.

The model's JSON is never validated on the way out of the API, so every
consumer reads it through these builders: missing fields become empty values,
unknown departments become "Unassigned", and nothing here raises.
"""

from dataclasses import dataclass, field
from typing import Any

from doc_analyzer.analysis.models import (
    CONFIDENCE_LEVELS,
    DEPARTMENTS,
    UNASSIGNED_DEPARTMENT,
    AnalysisResult,
)


@dataclass(frozen=True)
class KeyPointView:
    point: str
    department: str = UNASSIGNED_DEPARTMENT
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TodoView:
    task: str
    source_point: str = ""


@dataclass(frozen=True)
class CrossReferenceView:
    question: str
    answer: str = ""
    found_in: str = ""
    confidence: str = "low"

    @property
    def found(self) -> bool:
        return bool(self.answer)


@dataclass(frozen=True)
class ResultView:
    translated_text: str = ""
    summary: str = ""
    key_points: list[KeyPointView] = field(default_factory=list)
    todos_by_department: dict[str, list[TodoView]] = field(
        default_factory=lambda: {department: [] for department in DEPARTMENTS}
    )
    cross_reference: list[CrossReferenceView] = field(default_factory=list)
    response_template: str = ""


def build_result_view(data: AnalysisResult) -> ResultView:
    """Build a ResultView from whatever JSON value the model returned."""
    if not isinstance(data, dict):
        return ResultView()
    return ResultView(
        translated_text=_as_text(data.get("translated_text")),
        summary=_as_text(data.get("summary")),
        key_points=build_key_points(data.get("key_points")),
        todos_by_department=build_todos(data.get("todos_by_department")),
        cross_reference=build_cross_references(data.get("cross_reference")),
        response_template=_as_text(data.get("response_template")),
    )


def normalize_department(value: Any) -> str:
    return value if value in DEPARTMENTS else UNASSIGNED_DEPARTMENT


def build_key_points(raw: Any) -> list[KeyPointView]:
    views = []
    for item in _as_list(raw):
        if not isinstance(item, dict):
            continue
        views.append(
            KeyPointView(
                point=_as_text(item.get("point")),
                department=normalize_department(item.get("department")),
                tags=[_as_text(tag) for tag in _as_list(item.get("tags")) if tag],
            )
        )
    return views


def build_todos(raw: Any) -> dict[str, list[TodoView]]:
    """Return to-dos for all departments in canonical order.

    Departments the model left out, and every department when ``raw`` is not a
    mapping, get an empty list. Keys outside the enumeration are ignored.
    """
    by_department = raw if isinstance(raw, dict) else {}
    todos: dict[str, list[TodoView]] = {}
    for department in DEPARTMENTS:
        todos[department] = [
            TodoView(
                task=_as_text(item.get("task")),
                source_point=_as_text(item.get("source_point")),
            )
            for item in _as_list(by_department.get(department))
            if isinstance(item, dict)
        ]
    return todos


def build_cross_references(raw: Any) -> list[CrossReferenceView]:
    views = []
    for item in _as_list(raw):
        if not isinstance(item, dict):
            continue
        confidence = item.get("confidence")
        views.append(
            CrossReferenceView(
                question=_as_text(item.get("question")),
                answer=_as_text(item.get("answer")),
                found_in=_as_text(item.get("found_in")),
                confidence=confidence if confidence in CONFIDENCE_LEVELS else "low",
            )
        )
    return views


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
