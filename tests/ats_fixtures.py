from __future__ import annotations

from io import BytesIO
from typing import Sequence

from ats_analyzer.ai.types import ChatCompletion, ChatMessage

WELL_FORMED_REPLY = (
    "ATS_SCORE: 85/100\n"
    "ATS_COMPATIBILITY: COMPATÍVEL\n"
    "\n"
    "KEY_STRENGTHS:\n"
    "- Liderança + 3 projetos entregues\n"
    "\n"
    "CRITICAL_IMPROVEMENTS:\n"
    "- Falta de métricas → Adicionar números\n"
    "\n"
    "KEYWORD_ANALYSIS:\n"
    "Setoriais: Python, SQL\n"
    "\n"
    "FORMATTING_ISSUES:\n"
    "- Fonte inconsistente\n"
    "\n"
    "TEMPLATE_SUGGESTION: Moderno"
)

RESUME_LINE = "Engenheira de software com 6 anos em Python, SQL e AWS, liderando squads de produto. "


def resume_text(length: int = 800) -> str:
    return (RESUME_LINE * (length // len(RESUME_LINE) + 1))[:length]


class FakeAIClient:
    def __init__(self, content: str = WELL_FORMED_REPLY, *, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> ChatCompletion:
        self.calls.append({"messages": list(messages), "temperature": temperature, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return ChatCompletion(content=self.content, model="deepseek-chat")


def _escape_pdf_text(value: str) -> str:
    return value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: Sequence[Sequence[tuple[float, float, str]]]) -> bytes:
    """Build a minimal Helvetica PDF; each page is a list of (x, y, text) fragments."""
    objects: list[bytes] = []
    page_count = len(pages)
    font_id = 3
    first_page_id = 4

    kids = " ".join(f"{first_page_id + 2 * index} 0 R" for index in range(page_count))
    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode("ascii"))
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    for index, fragments in enumerate(pages):
        page_id = first_page_id + 2 * index
        content_id = page_id + 1
        stream = "".join(
            f"BT /F1 12 Tf 1 0 0 1 {x:g} {y:g} Tm ({_escape_pdf_text(text)}) Tj ET\n"
            for x, y, text in fragments
        ).encode("latin-1")
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 {font_id} 0 R >> >> /Contents {content_id} 0 R >>"
            ).encode("ascii")
        )
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode("ascii") + stream + b"endstream"
        )

    out = BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n")
    xref_at = out.tell()
    out.write(f"xref\n0 {len(objects) + 1}\n".encode("ascii"))
    out.write(b"0000000000 65535 f \n")
    for offset in offsets:
        out.write(f"{offset:010d} 00000 n \n".encode("ascii"))
    out.write(f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode("ascii"))
    return out.getvalue()


def build_encrypted_pdf(password: str = "segredo") -> bytes:
    from pypdf import PdfWriter

    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    writer.encrypt(user_password=password, owner_password=password + "-owner")
    out = BytesIO()
    writer.write(out)
    return out.getvalue()


def build_restricted_pdf(pages: Sequence[Sequence[tuple[float, float, str]]]) -> bytes:
    """AES-128 encrypted with an empty user password: opens without asking for one."""
    from pypdf import PdfWriter

    writer = PdfWriter(clone_from=BytesIO(build_pdf(pages)))
    writer.encrypt(user_password="", owner_password="owner", algorithm="AES-128")
    out = BytesIO()
    writer.write(out)
    return out.getvalue()


def build_docx_bytes() -> bytes:
    from zipfile import ZipFile

    out = BytesIO()
    with ZipFile(out, "w") as archive:
        archive.writestr("[Content_Types].xml", "<Types/>")
        archive.writestr("word/document.xml", "<w:document/>")
    return out.getvalue()
