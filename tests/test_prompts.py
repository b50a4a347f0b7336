import unittest

from ats_fixtures import resume_text

from ats_analyzer.schemas.analysis import AnalysisRequest
from ats_analyzer.services.prompts import (
    MAX_PROMPT_RESUME_CHARS,
    SYSTEM_PROMPT,
    build_analysis_messages,
    sanitize_resume_text,
)
from ats_analyzer.parsing.analysis_parser import REQUIRED_MARKERS, TEMPLATE_SUGGESTION


class SanitizeResumeTextTests(unittest.TestCase):
    def test_collapses_line_breaks_and_whitespace(self):
        self.assertEqual(
            sanitize_resume_text("  Maria  Silva\r\nAnalista\n\n\tDados  "),
            "Maria Silva Analista Dados",
        )

    def test_truncates_before_collapsing(self):
        text = "a" * (MAX_PROMPT_RESUME_CHARS + 500)
        self.assertEqual(len(sanitize_resume_text(text)), MAX_PROMPT_RESUME_CHARS)


class BuildAnalysisMessagesTests(unittest.TestCase):
    def test_system_prompt_defines_every_section_marker(self):
        for marker in (*REQUIRED_MARKERS, TEMPLATE_SUGGESTION):
            self.assertIn(f"{marker}:", SYSTEM_PROMPT)

    def test_user_prompt_interpolates_request_metadata(self):
        request = AnalysisRequest(
            text=resume_text(600),
            industry="ti",
            experienceLevel="senior",
            jobDescription="V" * 900,
        )
        sanitized = sanitize_resume_text(request.text)
        system, user = build_analysis_messages(request, sanitized)
        self.assertEqual(system.role, "system")
        self.assertEqual(user.role, "user")
        self.assertIn("**Área:** TI", user.content)
        self.assertIn("**Nível:** SENIOR", user.content)
        self.assertIn("**Descrição da Vaga:** " + "V" * 500 + "\n", user.content)
        self.assertNotIn("V" * 501, user.content)
        self.assertTrue(user.content.endswith(sanitized))

    def test_missing_job_description_is_blank(self):
        request = AnalysisRequest(text=resume_text(500))
        _, user = build_analysis_messages(request, "cv")
        self.assertIn("**Descrição da Vaga:** \n", user.content)
        self.assertIn("**Área:** GERAL", user.content)
        self.assertIn("**Nível:** PLENO", user.content)


if __name__ == "__main__":
    unittest.main()
