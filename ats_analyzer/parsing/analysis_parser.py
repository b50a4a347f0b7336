"""Section parser for the model's plain-text ATS report.

The analysis prompt asks the model to answer in a loose, human-readable
layout::

    ATS_SCORE: 85/100
    ATS_COMPATIBILITY: COMPATÍVEL

    KEY_STRENGTHS:
    - Liderança + 3 projetos entregues

    CRITICAL_IMPROVEMENTS:
    - Falta de métricas → Adicionar números

    KEYWORD_ANALYSIS:
    Setoriais: Python, SQL

    FORMATTING_ISSUES:
    - Fonte inconsistente

    TEMPLATE_SUGGESTION: Moderno

Markers are located with plain substring search, not anchored to line starts,
so extra decoration around them is tolerated. A marker name quoted inside
another section's prose can confuse the search; that is a known limitation of
the format.

``parse`` is strict and raises ``AnalysisParseError``. ``parse_analysis`` is
what callers use: it never raises and degrades to ``FALLBACK_ANALYSIS``.
"""

from __future__ import annotations

import logging
import re

from ats_analyzer.schemas.analysis import StructuredAnalysis
from ats_analyzer.services.prompts import RESPONSE_DIVIDER

logger = logging.getLogger(__name__)

ATS_SCORE = "ATS_SCORE"
ATS_COMPATIBILITY = "ATS_COMPATIBILITY"
KEY_STRENGTHS = "KEY_STRENGTHS"
CRITICAL_IMPROVEMENTS = "CRITICAL_IMPROVEMENTS"
KEYWORD_ANALYSIS = "KEYWORD_ANALYSIS"
FORMATTING_ISSUES = "FORMATTING_ISSUES"
TEMPLATE_SUGGESTION = "TEMPLATE_SUGGESTION"

REQUIRED_MARKERS: tuple[str, ...] = (
    ATS_SCORE,
    KEY_STRENGTHS,
    CRITICAL_IMPROVEMENTS,
    KEYWORD_ANALYSIS,
    FORMATTING_ISSUES,
)

SECTION_BREAK = "\n\n"
LIST_MARKER = "-"

_LEADING_COLON_RE = re.compile(r"^:\s*")
_DIVIDER_RE = re.compile(rf"^[ \t]*{re.escape(RESPONSE_DIVIDER)}[ \t]*$", flags=re.MULTILINE)

FALLBACK_ANALYSIS = StructuredAnalysis(
    ats="Não foi possível analisar a compatibilidade ATS",
    strengths=["Não foi possível identificar os pontos fortes"],
    improvements=["Não foi possível gerar sugestões de melhoria"],
    keywords=["Não foi possível extrair palavras-chave"],
    formatting="Não foi possível analisar a formatação",
)


class AnalysisParseError(ValueError):
    pass


def extract_section(document: str, start_marker: str, end_marker: str) -> str:
    start = document.find(start_marker)
    if start == -1:
        return ""
    content_start = start + len(start_marker)
    end = document.find(end_marker, content_start)
    section = document[content_start:] if end == -1 else document[content_start:end]
    return _LEADING_COLON_RE.sub("", section.strip(), count=1)


def extract_list_items(document: str, marker: str) -> list[str]:
    section = extract_section(document, marker, SECTION_BREAK)
    items: list[str] = []
    for line in section.split("\n"):
        stripped = line.strip()
        if not stripped.startswith(LIST_MARKER):
            continue
        items.append(stripped[len(LIST_MARKER):].strip())
    return items


def extract_keywords(document: str, marker: str) -> list[str]:
    section = extract_section(document, marker, SECTION_BREAK)
    keywords: list[str] = []
    for line in section.split("\n"):
        _label, colon, remainder = line.partition(":")
        if not colon:
            continue
        keywords.extend(token.strip() for token in remainder.split(",") if token.strip())
    return keywords


def missing_markers(document: str) -> list[str]:
    return [marker for marker in REQUIRED_MARKERS if marker not in document]


def reply_body(raw_reply: str) -> str:
    """Drop anything the model echoed above the prompt's dashed divider."""
    match = _DIVIDER_RE.search(raw_reply or "")
    if match is None:
        return raw_reply or ""
    body = raw_reply[match.end():].lstrip("\r\n")
    return body if body.strip() else raw_reply


def parse(document: str) -> StructuredAnalysis:
    sections = [chunk for chunk in (document or "").split(SECTION_BREAK) if chunk]
    if not sections:
        raise AnalysisParseError("Formato de análise inválido")

    missing = missing_markers(document)
    if missing:
        raise AnalysisParseError(f"Seções faltando: {', '.join(missing)}")

    return StructuredAnalysis(
        ats=extract_section(document, ATS_SCORE, ATS_COMPATIBILITY),
        strengths=extract_list_items(document, KEY_STRENGTHS),
        improvements=extract_list_items(document, CRITICAL_IMPROVEMENTS),
        keywords=extract_keywords(document, KEYWORD_ANALYSIS),
        formatting=extract_section(document, FORMATTING_ISSUES, TEMPLATE_SUGGESTION),
    )


def parse_analysis(document: str) -> StructuredAnalysis:
    try:
        return parse(document)
    except Exception as exc:  # noqa: BLE001
        logger.warning("analysis_parse_fallback chars=%s reason=%s", len(document or ""), exc)
        return FALLBACK_ANALYSIS.model_copy(deep=True)
