# ============================================================================
# src/sut_audit/clients/ocr_client.py
# ============================================================================
"""
Vision OCR Client

Sends a report image to an OpenAI vision model and returns the transcription
as plain text/Markdown. Tables are requested as Markdown so the report parser
can find the active-ingredient table.

Usage:
    client = VisionOCRClient()
    text = await client.run_ocr(Path("inputs/rapor1.jpg"))
"""

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path
from typing import Optional

from openai import AsyncOpenAI

from sut_audit.config import llm_settings
from sut_audit.utils.exceptions import OCRRequestError

logger = logging.getLogger(__name__)

OCR_SYSTEM_PROMPT = (
    "Extract all text from the medical report image. Preserve rows/columns as "
    "markdown tables where possible. Return plain text/markdown only."
)


class VisionOCRClient:
    """OpenAI vision-based OCR for medical report images."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None
    ):
        self.api_key = api_key or llm_settings.OPENAI_API_KEY
        self.base_url = base_url or llm_settings.OPENAI_BASE_URL
        self.model = model or llm_settings.OPENAI_MODEL
        self.temperature = llm_settings.OCR_TEMPERATURE if temperature is None else temperature
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy load the OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
            logger.info(f"OCR client initialized: model={self.model}")
        return self._client

    @staticmethod
    def _image_data_url(image_path: Path, data: bytes) -> str:
        mime_type, _ = mimetypes.guess_type(image_path.name)
        image_b64 = base64.b64encode(data).decode("ascii")
        return f"data:{mime_type or 'image/jpeg'};base64,{image_b64}"

    async def run_ocr(self, image_path: Path) -> str:
        """
        Transcribe one report image.

        Raises:
            OCRRequestError: API key missing or empty response
        """
        if not self.api_key:
            raise OCRRequestError("OPENAI_API_KEY missing")

        image_path = Path(image_path).resolve()
        data = await asyncio.to_thread(image_path.read_bytes)

        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": OCR_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image_url",
                            "image_url": {"url": self._image_data_url(image_path, data)},
                        }
                    ],
                },
            ],
            temperature=self.temperature,
        )

        text = ""
        if completion.choices:
            text = (completion.choices[0].message.content or "").strip()
        if not text:
            raise OCRRequestError(f"Empty OCR response for {image_path.name}")

        logger.info(f"OCR for {image_path.name}: {len(text)} chars")
        return text
