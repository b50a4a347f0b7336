from __future__ import annotations

import re

from ats_analyzer.schemas.analysis import AnalysisView, ImprovementView, StructuredAnalysis

IMPROVEMENT_ARROW = "→"

_DIGITS_RE = re.compile(r"\d+")
_BRACKETS_RE = re.compile(r"[\[\]]")


def display_score(ats: str) -> int:
    match = _DIGITS_RE.search(ats or "")
    if match is None:
        return 0
    return int(match.group(0))


def strip_brackets(text: str) -> str:
    return _BRACKETS_RE.sub("", text or "")


def split_improvement(item: str) -> tuple[str, str]:
    heading, *rest = (item or "").split(IMPROVEMENT_ARROW)
    return heading.strip(), IMPROVEMENT_ARROW.join(rest).strip()


def build_analysis_view(structured: StructuredAnalysis) -> AnalysisView:
    improvements: list[ImprovementView] = []
    for item in structured.improvements:
        heading, body = split_improvement(strip_brackets(item))
        improvements.append(ImprovementView(heading=heading, body=body))

    return AnalysisView(
        score=display_score(structured.ats),
        ats=strip_brackets(structured.ats),
        strengths=[strip_brackets(item) for item in structured.strengths],
        improvements=improvements,
        keywords=[strip_brackets(item) for item in structured.keywords],
        formatting=strip_brackets(structured.formatting),
    )
