"""Helpers for reading API Gateway proxy events."""
import base64
import json
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel

from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class CallerIdentity(BaseModel):
    uid: str
    email: Optional[str] = None


def _get_authorizer_claims(event: Dict[str, Any]) -> Dict[str, Any]:
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    # REST API (Cognito user pool authorizer)
    claims = authorizer.get("claims")
    if claims:
        return claims
    # HTTP API (JWT authorizer)
    jwt = authorizer.get("jwt") or {}
    return jwt.get("claims") or {}


def get_caller_identity(event: Dict[str, Any]) -> Optional[CallerIdentity]:
    """Returns the authenticated caller, or None when the request carries no identity."""
    claims = _get_authorizer_claims(event)
    uid = claims.get("sub")
    if not uid:
        return None
    return CallerIdentity(uid=uid, email=claims.get("email"))


def get_http_method(event: Dict[str, Any]) -> str:
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method", "")
    return method.upper()


def parse_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    body = event.get("body")
    if body is None:
        return {}
    if isinstance(body, dict):
        return body
    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise InvalidArgumentError("Request body could not be decoded.", details=str(e))
    try:
        payload = json.loads(body) if body else {}
    except json.JSONDecodeError as e:
        raise InvalidArgumentError("Request body must be valid JSON.", details=str(e))
    if not isinstance(payload, dict):
        raise InvalidArgumentError("Request body must be a JSON object.")
    return payload
