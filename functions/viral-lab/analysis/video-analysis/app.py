import asyncio
import base64
import binascii
from typing import Any, Awaitable, Callable, Dict, Optional
from urllib.parse import urlparse

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ValidationError

from shared_utils.common_response_utils import (
    error_response,
    get_request_origin,
    options_response,
    server_error_response,
    success_response,
)
from shared_utils.exceptions import (
    InternalError,
    InvalidArgumentError,
    NotImplementedFeatureError,
    SchemaViolationError,
    UnauthenticatedError,
    ViralLabError,
)
from shared_utils.request_utils import CallerIdentity, get_caller_identity, get_http_method, parse_json_body

from . import constants
from .config import ServiceConfig
from .gemini_helper import GeminiGateway, text_part, video_part
from .helper import build_analysis_prompt, build_remix_prompt, parse_analysis_response
from .schemas import (
    AnalysisResult,
    AnalyzeVideoRequest,
    AnalyzeVideoUrlRequest,
    RemixedScript,
    RemixScriptRequest,
)

logger = Logger(service=constants.SERVICE_NAME)


def _validation_details(error: ValidationError):
    return error.errors(include_url=False, include_context=False, include_input=False)


class VideoAnalysisHandlers:
    """
    The remotely invokable operations. Each call is stateless: authenticate,
    validate, build the prompt, call the model once, finalize.
    """

    def __init__(self, config: ServiceConfig, gateway: GeminiGateway):
        self.config = config
        self.gateway = gateway

    @staticmethod
    def _require_identity(identity: Optional[CallerIdentity]) -> CallerIdentity:
        if identity is None:
            raise UnauthenticatedError()
        return identity

    def _decode_video(self, request: AnalyzeVideoRequest) -> bytes:
        try:
            # MIME-style base64 is wrapped with newlines
            video_bytes = base64.b64decode("".join(request.video_data.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidArgumentError('"videoData" must be a base64 encoded string.', details=str(e))
        if not video_bytes:
            raise InvalidArgumentError('The function must be called with a "videoData" argument.')
        if len(video_bytes) > self.config.max_video_bytes:
            raise InvalidArgumentError(
                "The video is too large to analyze.",
                details=f"{len(video_bytes)} bytes exceeds the limit of {self.config.max_video_bytes} bytes",
            )
        return video_bytes

    async def analyze_video(self, payload: Dict[str, Any], identity: Optional[CallerIdentity]) -> AnalysisResult:
        caller = self._require_identity(identity)

        if not payload.get("videoData"):
            raise InvalidArgumentError('The function must be called with a "videoData" argument.')
        try:
            request = AnalyzeVideoRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidArgumentError("Invalid analysis request.", details=_validation_details(e))

        video_bytes = self._decode_video(request)
        mime_type = request.mime_type or self.config.default_mime_type
        logger.info("Analyzing video", extra={"uid": caller.uid, "mime_type": mime_type, "video_bytes": len(video_bytes)})

        try:
            raw_text = await self.gateway.generate_text(
                [text_part(build_analysis_prompt()), video_part(video_bytes, mime_type)],
                response_schema=AnalysisResult,
            )
            result = parse_analysis_response(raw_text)
        except SchemaViolationError:
            logger.warning("Gemini analysis returned an invalid structure", extra={"uid": caller.uid})
            raise
        except Exception:
            logger.exception("Gemini Analysis Failed", extra={"uid": caller.uid})
            raise InternalError("Analysis failed")

        logger.info("Analysis completed", extra={"uid": caller.uid, "score": result.score})
        return result

    async def remix_script(self, payload: Dict[str, Any], identity: Optional[CallerIdentity]) -> RemixedScript:
        caller = self._require_identity(identity)

        try:
            request = RemixScriptRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidArgumentError(
                'Invalid remix request: "analysis" needs hook, retention, payoff and sentiment, "variables" needs niche and product.',
                details=_validation_details(e),
            )

        logger.info("Remixing script", extra={"uid": caller.uid, "niche": request.variables.niche})
        try:
            prompt = build_remix_prompt(request.analysis, request.variables)
            script = await self.gateway.generate_text([text_part(prompt)])
        except Exception:
            logger.exception("Gemini Remix Failed", extra={"uid": caller.uid})
            raise InternalError("Remix failed")

        return RemixedScript(script=script)

    async def analyze_video_url(self, payload: Dict[str, Any], identity: Optional[CallerIdentity]) -> BaseModel:
        """Analysis by URL is accepted as an operation but not implemented: it always fails."""
        self._require_identity(identity)

        try:
            request = AnalyzeVideoUrlRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidArgumentError('The function must be called with a "url" argument.', details=_validation_details(e))

        parsed_url = urlparse(request.url.strip())
        if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
            raise InvalidArgumentError("The url must be an absolute http(s) URL.", details=request.url)

        raise NotImplementedFeatureError("URL downloading is not yet implemented. Please upload a file for now.")


def _dispatch(
    event: Dict[str, Any],
    operation: Callable[[Dict[str, Any], Optional[CallerIdentity]], Awaitable[BaseModel]],
    success_message: str,
) -> Dict[str, Any]:
    origin = get_request_origin(event)
    if get_http_method(event) == "OPTIONS":
        return options_response(origin)

    async def _run() -> BaseModel:
        # Identity is resolved before the body is even parsed
        identity = get_caller_identity(event)
        if identity is None:
            raise UnauthenticatedError()
        payload = parse_json_body(event)
        return await operation(payload, identity)

    try:
        result = asyncio.run(_run())
        return success_response(data=result.model_dump(), message=success_message, origin=origin)
    except ViralLabError as e:
        return error_response(e, origin=origin)
    except Exception:
        logger.exception("Unhandled error while processing request")
        return server_error_response(origin=origin)


def build_handlers(config: Optional[ServiceConfig] = None) -> VideoAnalysisHandlers:
    config = config or ServiceConfig.from_env()
    return VideoAnalysisHandlers(config=config, gateway=GeminiGateway(config))


# Cold start: a missing GEMINI_API_KEY aborts initialisation here
HANDLERS = build_handlers()


def analyze_video_handler(event, context):
    return _dispatch(event, HANDLERS.analyze_video, "Analysis completed successfully")


def remix_script_handler(event, context):
    return _dispatch(event, HANDLERS.remix_script, "Remix generated successfully")


def analyze_video_url_handler(event, context):
    return _dispatch(event, HANDLERS.analyze_video_url, "Analysis completed successfully")
