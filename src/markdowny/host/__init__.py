"""Editor services consumed by the engine, plus an in-memory host."""

from .memory import BufferValidationError, MemoryBuffer, MemoryDocument, MemorySelection
from .services import HrefPrompt, SelectionService, TextBufferService

__all__ = [
    "TextBufferService",
    "SelectionService",
    "HrefPrompt",
    "BufferValidationError",
    "MemoryBuffer",
    "MemoryDocument",
    "MemorySelection",
]
