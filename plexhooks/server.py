import errno
import html
import json
import logging
import typing
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse

from plexhooks.exceptions import PayloadError

if typing.TYPE_CHECKING:
    from plexhooks.platform import WebhooksPlatform

logger = logging.getLogger(__name__)

__all__ = ["create_app", "landing_page", "run_server"]

PAYLOAD_FIELD = "payload"

LANDING_PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Plex Webhooks</title>
    <style>
      html, body {{
        width: 100%;
        height: 100%;
        background-color: rgb(31, 35, 38);
        color: rgb(255, 255, 255);
        font-family: "Helvetica Neue", Helvetica, Arial, sans-serif;
        font-size: 14px;
        margin: 0;
      }}
      .container {{
        display: flex;
        align-items: center;
        justify-content: center;
        flex-direction: column;
        height: 100%;
        text-align: center;
      }}
      input {{
        background-color: rgba(255, 255, 255, 0.08);
        color: rgb(238, 238, 238);
        border: none;
        border-radius: 4px;
        height: 40px;
        width: 280px;
        text-align: center;
      }}
      a {{ color: #cc7b19; text-decoration: none; }}
    </style>
  </head>
  <body>
    <div class="container">
      <p>Add this URL on the<br />
        <a href="https://app.plex.tv/desktop#!/settings/webhooks" target="_blank"
          >Webhooks page</a> of your Plex Media Server:
      </p>
      <input type="text" value="{url}" onClick="this.select()" />
    </div>
  </body>
</html>
"""


def landing_page(url: str) -> str:
    return LANDING_PAGE_TEMPLATE.format(url=html.escape(url, quote=True))


def create_app(platform: "WebhooksPlatform") -> FastAPI:
    """
    Build the webhook application.

    Plex posts a multipart form whose ``payload`` field holds the JSON
    notification. An optional ``thumb`` file part is ignored.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await platform.start()
        try:
            yield
        finally:
            await platform.stop()

    app = FastAPI(title="plexhooks", lifespan=lifespan)
    app.state.platform = platform

    @app.post("/")
    async def receive_webhook(request: Request) -> Response:
        form = await request.form()
        raw_payload = form.get(PAYLOAD_FIELD)

        logger.debug(f"Raw Plex payload: {raw_payload}")

        if not raw_payload or not isinstance(raw_payload, str):
            logger.warning("Received POST without payload field.")
            return Response(status_code=400)

        try:
            payload = json.loads(raw_payload)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse Plex payload JSON: {e}")
            return Response(status_code=400)

        try:
            await platform.process_payload(payload)
        except PayloadError as e:
            logger.error(f"Rejected Plex payload: {e.message}")
        except Exception as e:
            logger.exception(f"Webhook handler raised an error: {e}")

        return Response(status_code=200)

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        return HTMLResponse(landing_page(str(request.base_url)))

    return app


def run_server(
    platform: "WebhooksPlatform",
    host: str,
    port: int,
    log_config: typing.Optional[typing.Dict[str, typing.Any]] = None,
) -> None:
    app = create_app(platform)
    config = uvicorn.Config(app, host=host, port=port, log_config=log_config)
    server = uvicorn.Server(config)

    logger.info(f"Plex webhooks server listening at http://{host}:{port}")
    try:
        server.run()
    except OSError as e:
        if e.errno == errno.EADDRNOTAVAIL:
            logger.error(f"Address not available: {host}:{port}")
        elif e.errno == errno.EADDRINUSE:
            logger.error(f"Address already in use: {host}:{port}")
        else:
            logger.error(str(e))
        raise
