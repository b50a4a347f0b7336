from __future__ import annotations

import re

from ats_analyzer.ai.types import ChatMessage
from ats_analyzer.schemas.analysis import AnalysisRequest

MAX_PROMPT_RESUME_CHARS = 3000
MAX_PROMPT_JOB_DESCRIPTION_CHARS = 500

RESPONSE_DIVIDER = "--------------------------"

SYSTEM_PROMPT = f"""Você é um especialista em RH com certificação ATS. Siga rigorosamente:

1. **Análise Estrutural** (40%)
- Compatibilidade com Gupy/Vagas.com
- Formato cronológico reverso
- Densidade de palavras-chave

2. **Otimização Semântica** (30%)
- Mapeamento de sinônimos setoriais
- Correspondência contextual com a vaga
- Uso de verbos de ação quantificáveis

3. **Análise de Mercado** (30%)
- Progressão de carreira lógica
- Compatibilidade salarial implícita
- Gap analysis temporal

**Formato de Resposta OBRIGATÓRIO:**
{RESPONSE_DIVIDER}
ATS_SCORE: [0-100]/100
ATS_COMPATIBILITY: [COMPATÍVEL|PARCIAL|INCOMPATÍVEL]

KEY_STRENGTHS:
- [Força 1] + [Métrica]
- [Força 2] + [Métrica]

CRITICAL_IMPROVEMENTS:
- [Prioridade 1] → [Solução]
- [Prioridade 2] → [Solução]

KEYWORD_ANALYSIS:
Setoriais: [kw1, kw2, kw3]
Soft Skills: [ss1, ss2]
Tecnologias: [tech1, tech2]

FORMATTING_ISSUES:
- [Problema 1]
- [Problema 2]

TEMPLATE_SUGGESTION: [Modelo Recomendado]"""

_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_resume_text(text: str) -> str:
    clipped = (text or "")[:MAX_PROMPT_RESUME_CHARS]
    single_line = _LINE_BREAK_RE.sub(" ", clipped)
    return _WHITESPACE_RE.sub(" ", single_line).strip()


def build_user_prompt(request: AnalysisRequest, sanitized_text: str) -> str:
    job_description = (request.job_description or "")[:MAX_PROMPT_JOB_DESCRIPTION_CHARS]
    return (
        f"**Área:** {request.industry}\n"
        f"**Nível:** {request.experience_level}\n"
        f"**Descrição da Vaga:** {job_description}\n"
        f"**Currículo:** {sanitized_text}"
    )


def build_analysis_messages(request: AnalysisRequest, sanitized_text: str) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_user_prompt(request, sanitized_text)),
    ]
