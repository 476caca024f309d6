import json
import logging
import os

from .exceptions import InternalError, ViralLabError

# Set up structured logger
logger = logging.getLogger()
if not logger.handlers:
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        '{"level": "%(levelname)s", "message": "%(message)s", "module": "%(module)s", "function": "%(funcName)s"}'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

# Environment flag (set this in Lambda env vars)
ENV = os.getenv("ENVIRONMENT", "dev").lower()

DEV_ORIGIN = "http://localhost:5173"


def get_request_origin(event):
    """Extract the origin from the Lambda event"""
    headers = event.get('headers', {}) or {}
    # API Gateway might have different header casing
    origin = headers.get('Origin') or headers.get('origin')
    return origin


def get_allowed_origins():
    allowed_origins = [
        DEV_ORIGIN,
        "https://localhost:5173",
    ]
    # Production domains come from ALLOWED_ORIGINS, comma separated
    if ENV == "prod":
        extra = os.getenv("ALLOWED_ORIGINS", "")
        allowed_origins.extend(o.strip() for o in extra.split(",") if o.strip())
    return allowed_origins


def get_cors_headers(origin=None):
    """Get CORS headers for responses"""
    cors_origin = DEV_ORIGIN
    if origin and origin in get_allowed_origins():
        cors_origin = origin
    elif ENV == "prod" and origin:
        # Reject unknown origins in production
        cors_origin = "null"

    return {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": cors_origin,
        "Access-Control-Allow-Headers": "Content-Type,Authorization,X-Requested-With",
        "Access-Control-Allow-Methods": "POST,OPTIONS",
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Max-Age": "86400"  # Cache preflight for 24 hours
    }


def api_response(status_code, message, data=None, error=None, origin=None):
    """Base response wrapper with CORS headers"""
    if error is not None and ENV == "prod":
        error = {**error, "details": None}

    response_body = {
        "status": status_code,
        "message": message,
        "data": data,
        "error": error
    }

    return {
        "statusCode": status_code,
        "headers": get_cors_headers(origin),
        "body": json.dumps(response_body)
    }


def success_response(data=None, message="Request completed successfully", origin=None):
    logger.info(f"API Success: {message}")
    return api_response(200, message, data=data, origin=origin)


def error_response(error: ViralLabError, origin=None):
    """Envelope for a ViralLabError. Only client-side errors carry details."""
    details = error.details if error.status_code < 500 else None
    if error.status_code >= 500:
        logger.error(f"Server Error: {error.message} | Code: {error.code}")
    else:
        logger.warning(f"Client Error: {error.message} | Code: {error.code} | Details: {error.details}")
    return api_response(
        error.status_code,
        error.message,
        error={
            "code": error.code,
            "type": error.error_type,
            "details": details
        },
        origin=origin
    )


def server_error_response(user_message="Oops! Something went wrong.", origin=None):
    return error_response(InternalError(user_message), origin=origin)


def options_response(origin=None):
    """Handle OPTIONS preflight requests"""
    return {
        "statusCode": 200,
        "headers": get_cors_headers(origin),
        "body": json.dumps({"message": "OK"})
    }
