"""FastAPI host exposing method channels over HTTP."""

import argparse
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import JSONResponse

from ..channel import BinaryMessenger, EXTRACT_TEXT, OCR_CHANNEL, create_ocr_channel
from ..core.errors import MethodNotImplementedError, PlatformChannelError, UnknownChannelError
from ..core.factory import create_service
from ..utils import load_config, setup_logging
from .models import ErrorBody, HealthResponse, MethodCallRequest, MethodReply

logger = logging.getLogger(__name__)


def create_app(config: Optional[Dict] = None, service=None) -> FastAPI:
    """Build the HTTP host.

    Args:
        config: Configuration dictionary; the packaged config when omitted
        service: Execution service to use instead of the configured one

    Returns:
        FastAPI application
    """
    config = config or load_config()
    service = service or create_service(config)
    channel_name = config.get('channel', {}).get('name', OCR_CHANNEL)

    messenger = BinaryMessenger()
    messenger.register(create_ocr_channel(service, name=channel_name))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Serving channels: {', '.join(messenger.names)}")
        yield
        service.close()

    app = FastAPI(
        title="OCR Bridge",
        description="Extract text from images through a method channel",
        lifespan=lifespan
    )
    app.state.messenger = messenger
    app.state.service = service

    async def dispatch(name: str, method: str, arguments: Any):
        try:
            channel = messenger.channel(name)
        except UnknownChannelError as e:
            raise HTTPException(status_code=404, detail=str(e))

        try:
            result = await channel.invoke_method(method, arguments)
        except MethodNotImplementedError:
            reply = MethodReply(status="not_implemented")
            return JSONResponse(status_code=501, content=reply.model_dump())
        except PlatformChannelError as e:
            return MethodReply(
                status="error",
                error=ErrorBody(code=e.code, message=e.message, details=e.details)
            )
        return MethodReply(status="success", result=result)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(
            status="ok",
            engine=getattr(service.engine, 'name', type(service.engine).__name__),
            platform=service.platform,
            channels=messenger.names
        )

    @app.post("/channels/{channel_name:path}", response_model=MethodReply)
    async def invoke(channel_name: str, call: MethodCallRequest):
        """Invoke a method on a registered channel."""
        return await dispatch(channel_name, call.method, call.args)

    @app.post("/ocr/extract_text", response_model=MethodReply)
    async def extract_text(payload: Optional[Dict[str, Any]] = Body(default=None)):
        """Shortcut for ``extractText`` on the OCR channel."""
        return await dispatch(channel_name, EXTRACT_TEXT, payload)

    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the OCR bridge HTTP host")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--host", help="Bind address")
    parser.add_argument("--port", type=int, help="Bind port")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.get('logging'))

    api_config = config.get('api', {})
    host = args.host or api_config.get('host', '127.0.0.1')
    port = args.port or api_config.get('port', 8000)

    uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    main()
