"""aiohttp endpoint receiving Telegram webhook deliveries.

Only POST is accepted. Every POST is answered with ``{"message": "OK"}``,
including bodies that are not JSON or not a Telegram update, so Telegram does
not redeliver them. An exception escaping the dispatcher becomes a 500.
"""

import json
import logging
from typing import Any

from aiohttp import web

from .dispatcher import UpdateDispatcher

logger = logging.getLogger(__name__)

DISPATCHER_KEY = web.AppKey("dispatcher", UpdateDispatcher)


async def _read_payload(request: web.Request) -> dict[str, Any]:
    """Decode the request body, falling back to an empty update."""
    body = await request.read()
    try:
        payload = json.loads(body)
    except ValueError:
        logger.warning("Received webhook body that is not valid JSON")
        return {}

    if not isinstance(payload, dict):
        logger.warning(f"Received webhook body of type {type(payload).__name__}")
        return {}
    return payload


async def telegram_webhook(request: web.Request) -> web.StreamResponse:
    """Handle one webhook delivery.

    Args:
        request: Incoming HTTP request.

    Returns:
        200 with an OK body, 405 for non-POST methods, 500 on unhandled errors.
    """
    if request.method != "POST":
        return web.Response(
            status=405,
            text=f"Method {request.method} Not Allowed",
            headers={"Allow": "POST"},
        )

    payload = await _read_payload(request)
    logger.debug(f"Received update from Telegram: {payload}")

    dispatcher = request.app[DISPATCHER_KEY]
    try:
        await dispatcher.dispatch(payload)
    except Exception as e:
        logger.error(f"Unhandled error while processing update: {e}", exc_info=True)
        return web.json_response({"message": "Internal Server Error"}, status=500)

    return web.json_response({"message": "OK"})


def create_web_app(dispatcher: UpdateDispatcher, webhook_path: str) -> web.Application:
    """Build the aiohttp application serving the webhook route.

    Args:
        dispatcher: Dispatcher receiving decoded updates.
        webhook_path: Route Telegram posts to.

    Returns:
        Configured aiohttp application.
    """
    app = web.Application()
    app[DISPATCHER_KEY] = dispatcher
    app.add_routes([web.route("*", webhook_path, telegram_webhook)])
    return app
