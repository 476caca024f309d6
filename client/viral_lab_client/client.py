import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx

from video_analysis.schemas import AnalysisResult, RemixVariables

from .encoding import encode_video_file
from .exceptions import (
    AnalysisFailedError,
    FeatureUnavailableError,
    RemixFailedError,
    RemoteCallError,
)
from .identity import IdentityProvider

logger = logging.getLogger(__name__)

ANALYZE_VIDEO = "analyzeVideo"
REMIX_SCRIPT = "remixScript"
ANALYZE_VIDEO_URL = "analyzeVideoUrl"

DEFAULT_TIMEOUT = httpx.Timeout(300.0, connect=10.0)


class ViralLabClient:
    """
    Calls the Viral Lab operations over HTTP.

    The client only ever talks to the backend; the model and its credential stay
    server side. Failures are collapsed into one generic error per operation.
    """

    def __init__(
        self,
        base_url: str,
        identity: IdentityProvider,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.identity = identity
        self.timeout = timeout
        self._transport = transport

    def _auth_headers(self) -> Dict[str, str]:
        user = self.identity.user
        if user is None:
            return {}
        return {"Authorization": f"Bearer {user.get_id_token()}"}

    async def call(self, name: str, payload: Dict[str, Any]) -> Any:
        """Invokes a remote operation by name and returns the `data` of its envelope."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as http:
            response = await http.post(f"{self.base_url}/{name}", json=payload, headers=self._auth_headers())

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}
        if response.is_error:
            error = body.get("error")
            if not isinstance(error, dict):
                error = {}
            raise RemoteCallError(name, error.get("code", "internal"), response.status_code, body.get("message"))
        return body.get("data")

    async def analyze_viral_video(self, video_path: Union[str, Path]) -> AnalysisResult:
        try:
            video = await encode_video_file(video_path)
            data = await self.call(ANALYZE_VIDEO, {"videoData": video.data, "mimeType": video.mime_type})
            return AnalysisResult.model_validate(data)
        except Exception as e:
            logger.error(f"Cloud Function Analysis Failed: {e}")
            raise AnalysisFailedError() from e

    async def generate_remix_script(self, analysis: AnalysisResult, variables: RemixVariables) -> str:
        try:
            data = await self.call(REMIX_SCRIPT, {
                "analysis": analysis.model_dump(),
                "variables": variables.model_dump(),
            })
            return data["script"]
        except Exception as e:
            logger.error(f"Cloud Function Remix Failed: {e}")
            raise RemixFailedError() from e

    async def analyze_video_url(self, url: str) -> AnalysisResult:
        try:
            data = await self.call(ANALYZE_VIDEO_URL, {"url": url})
        except RemoteCallError as e:
            if e.code == "not-implemented":
                raise FeatureUnavailableError() from e
            logger.error(f"Cloud Function URL Analysis Failed: {e}")
            raise AnalysisFailedError() from e
        except httpx.HTTPError as e:
            logger.error(f"Cloud Function URL Analysis Failed: {e}")
            raise AnalysisFailedError() from e
        return AnalysisResult.model_validate(data)
