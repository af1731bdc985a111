"""
Source discovery, message extraction and message id generation.
"""

from .discovery import find_js_files
from .extractor import JsMessageExtractor, extract_messages_from_file
from .fingerprint import FingerprintIdGenerator, MessageIdGenerator, generate_message_id

__all__ = [
    "FingerprintIdGenerator",
    "JsMessageExtractor",
    "MessageIdGenerator",
    "extract_messages_from_file",
    "find_js_files",
    "generate_message_id",
]
