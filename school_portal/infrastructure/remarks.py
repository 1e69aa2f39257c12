import google.generativeai as genai
import structlog

from ..application.use_cases.results import IRemarksWriter
from ..config import settings

logger = structlog.get_logger()

REMARKS_FALLBACK = "Excellent effort displayed in all subjects."
REMARKS_EMPTY = "Keep up the good work."
NOTICE_FALLBACK = "Notice content unavailable."


class GeminiRemarksWriter(IRemarksWriter):
    """Тексты от Gemini; при любой ошибке или без ключа отдаёт запасную строку."""

    def __init__(self, api_key: str | None = None, model_name: str | None = None):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        self._model = None

    def _get_model(self):
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    def _generate(self, prompt: str) -> str | None:
        if not self.api_key:
            logger.info("AI disabled, no GOOGLE_API_KEY")
            return None
        try:
            response = self._get_model().generate_content(prompt)
            return getattr(response, "text", None)
        except Exception as e:
            logger.warning("AI call error", error=str(e))
            return None

    def remarks(self, student_name: str, performance: str) -> str:
        prompt = (
            f"Write a professional academic remark for a student named {student_name} "
            f"based on this performance: {performance}. Keep it constructive and under 40 words."
        )
        text = self._generate(prompt)
        if text is None:
            return REMARKS_FALLBACK
        return text.strip() or REMARKS_EMPTY

    def notice(self, topic: str) -> str:
        prompt = (
            f"Draft a formal school notice about {topic}. "
            "Include date, subject, and body. Keep it professional."
        )
        text = self._generate(prompt)
        return (text or "").strip() or NOTICE_FALLBACK
