from .command import CommandEnvelope, OperationName
from .response import TextBlock, ToolResponse

__all__ = [
    "CommandEnvelope",
    "OperationName",
    "TextBlock",
    "ToolResponse",
]
