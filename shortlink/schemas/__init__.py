# re-export common schemas for simpler imports
from .link import LinkCreateRequest, LinkResponse, LinkEnvelope, ErrorEnvelope

__all__ = [
    "LinkCreateRequest",
    "LinkResponse",
    "LinkEnvelope",
    "ErrorEnvelope",
]
