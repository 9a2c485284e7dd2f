"""Builds the LLM prompt from the requested outputs.

Each output maps to one ``OutputSection``: a JSON-schema property and the one
instruction line that describes it. Both are emitted from the same table entry,
so a prompt never carries a schema property without its instruction or the
other way round.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass

from doc_analyzer.analysis.models import (
    CONFIDENCE_LEVELS,
    DEPARTMENTS,
    OutputId,
    wants_cross_documents,
)

PLACEHOLDER_TOKEN = "[PLACEHOLDER]"
NOT_FOUND_MARKER = "not found"

MAIN_DOCUMENT_HEADER = "=== MAIN DOCUMENT ==="
CROSS_DOCUMENTS_HEADER = "=== CROSS DOCUMENTS ==="
NO_CROSS_DOCUMENTS = "(none provided)"


@dataclass(frozen=True)
class OutputSection:
    field: str
    schema: dict[str, object]
    instruction: str

    def instruction_line(self, target_language: str) -> str:
        text = self.instruction.replace("{target_language}", target_language)
        return f'- "{self.field}": {text}'


@dataclass(frozen=True)
class PromptSpec:
    schema: dict[str, object]
    text: str


_DEPARTMENT_LIST = ", ".join(DEPARTMENTS)

_STRING: dict[str, object] = {"type": "string"}

OUTPUT_SECTIONS: dict[OutputId, OutputSection] = {
    OutputId.TRANSLATION: OutputSection(
        field="translated_text",
        schema=_STRING,
        instruction="Full translation of the main document into {target_language}.",
    ),
    OutputId.SUMMARY: OutputSection(
        field="summary",
        schema=_STRING,
        instruction=(
            "Detailed summary of the main document in 8-12 sentences (fewer only if "
            "the source is very short), covering key context, decisions, "
            "constraints and risks."
        ),
    ),
    OutputId.KEY_POINTS: OutputSection(
        field="key_points",
        schema={
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "point": _STRING,
                    "department": {"type": "string", "enum": list(DEPARTMENTS)},
                    "tags": {"type": "array", "items": _STRING},
                },
                "required": ["point", "department", "tags"],
            },
        },
        instruction=(
            'Array of { "point": string, "department": one of '
            f'[{_DEPARTMENT_LIST}], "tags": string[] }} for the main document.'
        ),
    ),
    OutputId.TODOS: OutputSection(
        field="todos_by_department",
        schema={
            "type": "object",
            "properties": {
                department: {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {"task": _STRING, "source_point": _STRING},
                        "required": ["task", "source_point"],
                    },
                }
                for department in DEPARTMENTS
            },
            "required": list(DEPARTMENTS),
        },
        instruction=(
            f"Object with ALL of the keys {_DEPARTMENT_LIST} (use an empty array "
            'when a department has nothing to do), each an array of '
            '{ "task": string, "source_point": string }.'
        ),
    ),
    OutputId.CROSS_REFERENCE: OutputSection(
        field="cross_reference",
        schema={
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "question": _STRING,
                    "answer": _STRING,
                    "found_in": _STRING,
                    "confidence": {"type": "string", "enum": list(CONFIDENCE_LEVELS)},
                },
                "required": ["question", "answer", "found_in", "confidence"],
            },
        },
        instruction=(
            'Array of { "question": string, "answer": string, "found_in": string, '
            '"confidence": "low"|"medium"|"high" }. Search the cross documents for '
            "answers to the questions and requests raised in the main document. "
            "REQUIRED: when no evidence is found in the cross documents, set "
            f'"answer" to "", "confidence" to "low" and "found_in" to "{NOT_FOUND_MARKER}".'
        ),
    ),
    OutputId.GENERATE_TEMPLATE: OutputSection(
        field="response_template",
        schema=_STRING,
        instruction=(
            "A structured email/letter reply template in {target_language}. Include a "
            "greeting, a reference to the inquiry, the key answers (use cross-document "
            "data when available) and a closing. Use "
            f"{PLACEHOLDER_TOKEN} for any information you cannot fill."
        ),
    ),
}


def normalize_outputs(outputs: Iterable[OutputId]) -> list[OutputId]:
    """Deduplicate and sort outputs into canonical order."""
    requested = set(outputs)
    return [output for output in OutputId if output in requested]


def build_schema(outputs: Iterable[OutputId]) -> dict[str, object]:
    sections = [OUTPUT_SECTIONS[output] for output in normalize_outputs(outputs)]
    return {
        "type": "object",
        "properties": {section.field: section.schema for section in sections},
    }


def build_prompt_spec(
    outputs: Iterable[OutputId],
    target_language: str,
    main_text: str,
    cross_text: str = "",
) -> PromptSpec:
    ordered = normalize_outputs(outputs)
    include_cross = wants_cross_documents(ordered)
    schema = build_schema(ordered)

    lines = [
        "You are a document analysis assistant. Analyze the provided document and "
        "return ONLY valid JSON.",
        "",
        f"Target language: {target_language}",
        f"Requested outputs: {', '.join(output.value for output in ordered)}",
        f"Allowed departments: {_DEPARTMENT_LIST}",
        "",
        "Instructions:",
        "- Use ONLY the MAIN DOCUMENT for translation, summary, key points and to-dos.",
    ]
    if include_cross:
        lines.append(
            "- Use the CROSS DOCUMENTS (if provided) for cross-referencing and to "
            "help fill the response template."
        )
    lines += ["", "Output requirements:"]
    lines += [
        OUTPUT_SECTIONS[output].instruction_line(target_language) for output in ordered
    ]
    lines += [
        "",
        "The JSON object must match this JSON schema:",
        json.dumps(schema, indent=2),
        "",
        "Return ONLY the JSON object with the requested fields. No markdown, no code "
        "fences, no explanations.",
        "",
        MAIN_DOCUMENT_HEADER,
        main_text,
    ]
    if include_cross:
        lines += ["", CROSS_DOCUMENTS_HEADER, cross_text or NO_CROSS_DOCUMENTS]

    return PromptSpec(schema=schema, text="\n".join(lines))


def build_prompt(
    outputs: Iterable[OutputId],
    target_language: str,
    main_text: str,
    cross_text: str = "",
) -> str:
    return build_prompt_spec(outputs, target_language, main_text, cross_text).text
