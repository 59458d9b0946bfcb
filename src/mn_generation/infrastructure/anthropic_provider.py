"""Anthropic Messages API implementation of TextGenerationProvider.

The SDK's own transient-failure retries are left at their defaults; this
module adds none.
"""

import logging

import anthropic
from anthropic import AsyncAnthropic

from src.mn_common.errors import GenerationFailedError

logger = logging.getLogger("mn.generation")

_SYSTEM_PROMPT = (
    "You are a clinical documentation assistant. Write concise, professional "
    "medical documentation. If information is missing, write "
    "\"Information not provided\" rather than making assumptions."
)

_SECTION_HINTS = {
    "subjective": "the patient's chief complaint, symptoms and history as reported",
    "objective": "measurable findings, vital signs and examination results",
    "assessment": "the clinical interpretation and differential diagnosis",
    "plan": "treatment, medications, follow-up and next steps",
}

_REPORT_GUIDES = {
    "soap": (
        "a SOAP note with the headers SUBJECTIVE, OBJECTIVE, ASSESSMENT and PLAN"
    ),
    "progress": (
        "a Progress Note covering patient status, interval history, examination, "
        "review of systems, assessment and plan"
    ),
    "discharge": (
        "a Discharge Summary covering admission, hospital course, procedures, "
        "discharge condition, medications, follow-up and discharge diagnosis"
    ),
}


def _format_patient_info(patient_info: dict[str, str] | None) -> str:
    if not patient_info:
        return "Not provided"
    return "\n".join(f"{key}: {value}" for key, value in patient_info.items() if value)


class AnthropicTextProvider:
    def __init__(self, client: AsyncAnthropic, model: str, max_tokens: int = 4096) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens

    @classmethod
    def from_api_key(cls, api_key: str, model: str, max_tokens: int) -> "AnthropicTextProvider":
        return cls(AsyncAnthropic(api_key=api_key), model, max_tokens)

    async def _complete(self, prompt: str) -> str:
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as exc:
            logger.error("anthropic call failed: %s", exc)
            raise GenerationFailedError(str(exc)) from exc

        for block in response.content:
            if block.type == "text":
                return block.text
        raise GenerationFailedError("No text content in AI response")

    async def generate_section(
        self,
        section: str,
        content: str,
        patient_info: dict[str, str] | None,
        report_type: str,
    ) -> str:
        hint = _SECTION_HINTS.get(section, f"the {section} section")
        prompt = (
            f"Write the {section.upper()} section of a {report_type} note, "
            f"covering {hint}.\n\n"
            f"Patient information:\n{_format_patient_info(patient_info)}\n\n"
            f"Clinician notes:\n{content}"
        )
        return await self._complete(prompt)

    async def review_report(
        self,
        subjective: str,
        objective: str,
        assessment: str,
        plan: str,
    ) -> str:
        prompt = (
            "Review this SOAP note for completeness, clinical consistency and "
            "clarity. List concrete suggestions.\n\n"
            f"SUBJECTIVE:\n{subjective}\n\n"
            f"OBJECTIVE:\n{objective}\n\n"
            f"ASSESSMENT:\n{assessment}\n\n"
            f"PLAN:\n{plan}"
        )
        return await self._complete(prompt)

    async def generate_report(self, patient_notes: str, report_type: str) -> str:
        guide = _REPORT_GUIDES.get(report_type, f"a {report_type} note")
        prompt = (
            f"Write {guide}. Use clear section headers and professional medical "
            "terminology.\n\n"
            f"Patient information:\n{patient_notes}"
        )
        return await self._complete(prompt)

    async def close(self) -> None:
        await self._client.close()
