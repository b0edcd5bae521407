"""Report analysis pipeline: extract text, summarise in English, translate to Roman Urdu, save."""
import logging

from healthmate.models import Insight
from healthmate.services.errors import NotFoundError
from healthmate.services.insight_store import InsightStore
from healthmate.services.pdf_extract import TextExtractor
from healthmate.services.summarizer import SummarizationClient
from healthmate.services.summary_parser import parse_structured_summary

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 8000
ROMAN_URDU_UNAVAILABLE = "Roman Urdu translation unavailable."

STRUCTURED_PROMPT = """
You are a medical report analysis assistant.
Analyze the following text from a lab report and respond ONLY in pure JSON with this structure:

{{
  "summary": "Short plain-English summary of the report",
  "abnormalValues": ["List of all values that seem high or low"],
  "suggestions": ["Lifestyle, diet, or exercise recommendations"],
  "questionsForDoctor": ["Questions the user should ask their doctor"]
}}

Do not include markdown or explanations, return raw JSON only.
Here is the report text:
{report_text}
"""

ROMAN_URDU_PROMPT = (
    "Translate the following English text into Roman Urdu, keeping it simple and easy to understand:\n\n"
    "{summary}"
)


def build_structured_prompt(report_text: str) -> str:
    return STRUCTURED_PROMPT.format(report_text=report_text)


def build_roman_urdu_prompt(summary: str) -> str:
    return ROMAN_URDU_PROMPT.format(summary=summary)


class ReportAnalyzer:
    """
    Runs one analysis for a stored file.

    Extraction failures abort the run; model and JSON failures only degrade the
    result, so a saved Insight is produced whenever the document could be read.
    """

    def __init__(
        self,
        store: InsightStore,
        extractor: TextExtractor,
        summarizer: SummarizationClient,
        max_chars: int = DEFAULT_MAX_CHARS,
    ):
        self.store = store
        self.extractor = extractor
        self.summarizer = summarizer
        self.max_chars = max_chars

    async def analyze(self, file_id: int, user_id: int) -> Insight:
        report = self.store.get_file(file_id)
        if not report:
            raise NotFoundError("File not found")

        extracted = await self.extractor.extract(report.file_url)
        report_text = extracted[: self.max_chars]
        logger.info("analyze: file_id=%s text_len=%s sent_len=%s", file_id, len(extracted), len(report_text))

        raw = await self.summarizer.complete(build_structured_prompt(report_text))
        structured = parse_structured_summary(raw)

        roman_urdu = await self.summarizer.complete(build_roman_urdu_prompt(structured.summary))

        insight = Insight(
            user_id=user_id,
            file_id=report.id,
            summary_english=structured.summary,
            summary_roman_urdu=roman_urdu or ROMAN_URDU_UNAVAILABLE,
            highlights=structured.abnormal_values,
            questions_for_doctor=structured.questions_for_doctor,
            suggestions=structured.suggestions,
        )
        return self.store.create(insight)
