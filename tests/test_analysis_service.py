import asyncio
import unittest

from ats_fixtures import WELL_FORMED_REPLY, FakeAIClient, resume_text

from ats_analyzer.parsing.analysis_parser import FALLBACK_ANALYSIS
from ats_analyzer.schemas.analysis import AnalysisRequest
from ats_analyzer.services.analysis_service import analyze_resume


def _analyze(client):
    request = AnalysisRequest(text=resume_text(700), industry="vendas")
    return asyncio.run(analyze_resume(request, client, timeout_s=5))


class AnalyzeResumeTests(unittest.TestCase):
    def test_divider_echo_is_dropped_before_parsing(self):
        raw = "Segue a análise.\n--------------------------\n" + WELL_FORMED_REPLY
        response = _analyze(FakeAIClient(raw))
        self.assertEqual(response.raw_analysis, raw)
        self.assertEqual(response.structured_analysis.keywords, ["Python", "SQL"])
        self.assertEqual(response.metadata.industry, "VENDAS")

    def test_missing_sections_are_logged_once(self):
        reply = WELL_FORMED_REPLY.replace("KEYWORD_ANALYSIS", "PALAVRAS")
        with self.assertLogs("ats_analyzer", level="WARNING") as captured:
            response = _analyze(FakeAIClient(reply))
        self.assertEqual(response.structured_analysis, FALLBACK_ANALYSIS)
        self.assertEqual(len(captured.records), 1)
        self.assertIn("KEYWORD_ANALYSIS", captured.records[0].getMessage())


if __name__ == "__main__":
    unittest.main()
