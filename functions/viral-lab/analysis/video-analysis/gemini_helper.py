import logging
from typing import Callable, Optional, Sequence, Type

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import BaseModel

from shared_utils.exceptions import GatewayError

from .config import ServiceConfig

logger = logging.getLogger(__name__)


def text_part(prompt: str) -> types.Part:
    return types.Part(text=prompt)


def video_part(data: bytes, mime_type: str) -> types.Part:
    """Inline binary video part. The bytes travel inside the request, no Files API upload."""
    return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))


def _default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


class GeminiGateway:
    """
    Sends content parts to the configured Gemini model and returns the raw completion text.

    A client is built per call from the process-wide config and closed when the
    call finishes. There is no retry and no caching: a failed call raises
    GatewayError and the caller decides what to surface.
    """

    def __init__(self, config: ServiceConfig, client_factory: Optional[Callable[[str], genai.Client]] = None):
        self.config = config
        self._client_factory = client_factory or _default_client_factory

    def _generation_config(self, response_schema: Optional[Type[BaseModel]]) -> types.GenerateContentConfig:
        if response_schema is None:
            return types.GenerateContentConfig(temperature=self.config.temperature)
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=response_schema,
            temperature=self.config.temperature,
        )

    async def generate_text(self, parts: Sequence[types.Part], response_schema: Optional[Type[BaseModel]] = None) -> str:
        """
        Returns the raw completion. With a response_schema Gemini is asked for JSON
        of that shape; the text still has to be parsed and validated by the caller.
        """
        client = None
        async_client = None
        try:
            client = self._client_factory(self.config.gemini_api_key.get_secret_value())
            async_client = client.aio

            logger.info(f"Requesting completion from {self.config.model_name} with {len(parts)} part(s).")
            response = await async_client.models.generate_content(
                model=self.config.model_name,
                contents=list(parts),
                config=self._generation_config(response_schema),
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error {e.code}: {e.status}")
            raise GatewayError(f"Gemini API error {e.code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Network error while calling Gemini: {type(e).__name__}")
            raise GatewayError("Network error while calling Gemini") from e
        finally:
            await _close_clients(client, async_client)

        text = response.text
        if not text:
            logger.error("Gemini returned an empty completion.")
            raise GatewayError("Gemini returned an empty completion.")
        logger.info(f"Received completion of {len(text)} characters.")
        return text


async def _close_clients(client, async_client):
    if async_client is not None and hasattr(async_client, "aclose"):
        try:
            await async_client.aclose()
        except Exception as e:
            logger.debug(f"Error closing async client: {e}")
    if client is not None and hasattr(client, "close"):
        try:
            client.close()
        except Exception as e:
            logger.warning(f"Error closing sync client: {e}")
