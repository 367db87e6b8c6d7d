"""AWS Lambda handler for the Creative Lab HTTP API (API Gateway proxy events)."""

import base64
import binascii
import json
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..api.serializers import serialize_entry, serialize_formats, serialize_user
from ..app import CreativeLab, build_app, configure_logging
from ..errors import CreativeLabError, EncodingError, ValidationError

_app: CreativeLab | None = None


def get_app() -> CreativeLab:
    """Build the app once per Lambda container."""
    global _app
    if _app is None:
        configure_logging()
        _app = build_app()
    return _app


def handler(event, context):
    """
    AWS Lambda handler - HTTP API.

    Routes:
        POST /login      {"email", "password"} -> {"token", "user"}
        POST /logout     -> {"status": "logged_out"}
        GET  /me         -> {"user"}
        GET  /formats    -> {"formats": [...]}
        POST /creatives  {"userInput", "occasion", "creativeType", "image": {"data", "mimeType"} | "imageUrl"}
        GET  /library    ?tz=<IANA zone, default UTC> -> {"items": [...], "stats": {...}}
    """
    return handle(get_app(), event)


def handle(app: CreativeLab, event: dict) -> dict:
    method, path = _route(event)
    route = ROUTES.get((method, path))
    if route is None:
        return _response(404, {"error": f"No route for {method} {path}"})

    try:
        return route(app, event)
    except CreativeLabError as e:
        print(f"{type(e).__name__} on {method} {path}: {e.message}", flush=True)
        return _response(e.status_code, {"error": e.message})
    except Exception as e:
        print(f"ERROR on {method} {path}: {e}", flush=True)
        return _response(500, {"error": "An unknown error occurred. Please try again."})


def login(app: CreativeLab, event: dict) -> dict:
    body = _body(event)
    session = app.authenticator.login(body.get("email", ""), body.get("password", ""))
    return _response(200, {"token": session.token, "user": serialize_user(session.user)})


def logout(app: CreativeLab, event: dict) -> dict:
    token = _token(event)
    if token:
        app.authenticator.logout(token)
    return _response(200, {"status": "logged_out"})


def me(app: CreativeLab, event: dict) -> dict:
    user = app.authenticator.require_user(_token(event))
    return _response(200, {"user": serialize_user(user)})


def formats(app: CreativeLab, event: dict) -> dict:
    return _response(200, {"formats": serialize_formats()})


def create_creative(app: CreativeLab, event: dict) -> dict:
    user = app.authenticator.require_user(_token(event))
    body = _body(event)

    user_input = _text_field(body, "userInput")
    occasion = _text_field(body, "occasion")
    creative_type = _text_field(body, "creativeType") or "instagram_post"
    image, mime_type = _image(body)

    print(f"Generating {creative_type} for {user.email}", flush=True)
    output = app.creatives.generate(user_input, occasion, creative_type, image, mime_type)
    entry = app.library.record(user, output, creative_type, user_input, occasion)
    return _response(200, serialize_entry(entry))


def library(app: CreativeLab, event: dict) -> dict:
    user = app.authenticator.require_user(_token(event))
    tz_name = (event.get("queryStringParameters") or {}).get("tz") or "UTC"
    try:
        tz = timezone.utc if tz_name == "UTC" else ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown time zone: {tz_name}") from None

    entries = app.library.list_entries(user)
    stats = app.library.stats(entries, now=datetime.now(tz))
    stats["timezone"] = tz_name
    return _response(200, {
        "items": [serialize_entry(e) for e in entries],
        "stats": stats,
    })


ROUTES = {
    ("POST", "/login"): login,
    ("POST", "/logout"): logout,
    ("GET", "/me"): me,
    ("GET", "/formats"): formats,
    ("POST", "/creatives"): create_creative,
    ("GET", "/library"): library,
}


def _route(event: dict) -> tuple[str, str]:
    # REST API (v1) and HTTP API (v2) payload formats
    http = event.get("requestContext", {}).get("http", {})
    method = event.get("httpMethod") or http.get("method") or "GET"
    path = event.get("rawPath") or event.get("path") or http.get("path") or "/"
    return method.upper(), path.rstrip("/") or "/"


def _body(event: dict) -> dict:
    body = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        raise ValidationError("Request body must be JSON.") from None
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def _text_field(body: dict, name: str) -> str:
    value = body.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"'{name}' must be a string.")
    return value


def _token(event: dict) -> str | None:
    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    auth = headers.get("authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip()
    return None


def _image(body: dict) -> tuple[bytes | str | None, str | None]:
    """Reference image from the request: inline base64 or a URL."""
    image = body.get("image")
    if image:
        try:
            data = base64.b64decode(image["data"], validate=True)
        except (KeyError, TypeError, binascii.Error) as e:
            raise EncodingError("The reference image could not be decoded.") from e
        if not data:
            raise EncodingError("The reference image is empty.")
        return data, image.get("mimeType") or None
    return body.get("imageUrl") or None, None


def _response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }
