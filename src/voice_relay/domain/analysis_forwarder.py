"""Forwards transcripts to the analysis LLM and interprets its reply."""

import re
import time

from pydantic import ValidationError

from voice_relay.domain.models import AnalysisOutcome, AnalysisResult, TranscriptAnalysis
from voice_relay.infrastructure.interfaces import LLMService
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)

SHORT_TRANSCRIPT_WARNING = "Transcript too short for analysis; analysis skipped"

ANALYSIS_PROMPT = """\
You analyze transcripts of recorded speech.

Return ONLY a JSON object, with no Markdown and no commentary, using exactly
this schema:

{{
  "summary": string,            // two or three sentences
  "sentiment": string,          // one of "positive", "neutral", "negative", "mixed"
  "sentiment_score": number,    // from -1.0 (very negative) to 1.0 (very positive)
  "tone": [string],             // short descriptors such as "calm", "urgent"
  "risk_flags": [string],       // safety, legal, or wellbeing concerns; [] if none
  "notable_quotes": [string]    // verbatim quotes from the transcript
}}

Transcript:
\"\"\"
{transcript}
\"\"\"
"""

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


def build_prompt(transcript: str) -> str:
    """Embeds a transcript into the analysis prompt."""
    return ANALYSIS_PROMPT.format(transcript=transcript.strip())


def parse_analysis(reply: str) -> TranscriptAnalysis | None:
    """Parses an LLM reply against TranscriptAnalysis, or returns None."""
    text = reply.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1).strip()
    try:
        return TranscriptAnalysis.model_validate_json(text)
    except ValidationError:
        return None


class AnalysisForwarder:
    """Sends a transcript to the analysis provider, once."""

    def __init__(self, llm_service: LLMService, model_name: str, min_transcript_chars: int):
        self._llm = llm_service
        self._model_name = model_name
        self._min_chars = min_transcript_chars

    def forward(self, transcript: str) -> AnalysisOutcome:
        """
        Analyzes a transcript unless it is too short to be worth a call.

        A reply that does not match the TranscriptAnalysis schema is kept as
        raw text instead of being treated as an error.

        Args:
            transcript: Text returned by the transcription stage.

        Returns:
            AnalysisOutcome holding either a result or a skip warning.

        Raises:
            AnalysisServiceError: If the provider call itself fails.
        """
        if len(transcript.strip()) < self._min_chars:
            logger.info(
                "Analysis skipped for short transcript",
                extra={"characters": len(transcript.strip()), "minimum": self._min_chars},
            )
            return AnalysisOutcome(warning=SHORT_TRANSCRIPT_WARNING)

        started = time.perf_counter()
        reply = self._llm.complete(build_prompt(transcript), self._model_name)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)

        parsed = parse_analysis(reply)
        if parsed is None:
            logger.warning(
                "Analysis reply did not match schema, keeping raw text",
                extra={"model": self._model_name, "reply_length": len(reply)},
            )
            result = AnalysisResult(raw_text=reply, model=self._model_name, elapsed_ms=elapsed_ms)
        else:
            result = AnalysisResult(parsed=parsed, model=self._model_name, elapsed_ms=elapsed_ms)

        logger.info(
            "Analysis completed",
            extra={
                "model": self._model_name,
                "elapsed_ms": elapsed_ms,
                "structured": parsed is not None,
            },
        )
        return AnalysisOutcome(result=result)
