"""API module for the OCR bridge."""

from .server import create_app
from .client import ChannelClient
from .models import MethodCallRequest, MethodReply, ErrorBody

__all__ = ["create_app", "ChannelClient", "MethodCallRequest", "MethodReply", "ErrorBody"]
