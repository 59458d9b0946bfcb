"""Text generation provider Protocol.

The provider is an external collaborator: request handlers call it only after
a successful credit debit. Implementations raise GenerationFailedError when the
upstream call fails or returns no text.
"""

from typing import Protocol


class TextGenerationProvider(Protocol):
    async def generate_section(
        self,
        section: str,
        content: str,
        patient_info: dict[str, str] | None,
        report_type: str,
    ) -> str: ...

    async def review_report(
        self,
        subjective: str,
        objective: str,
        assessment: str,
        plan: str,
    ) -> str: ...

    async def generate_report(self, patient_notes: str, report_type: str) -> str: ...

    async def close(self) -> None: ...
