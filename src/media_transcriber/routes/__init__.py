"""API route exports."""

from .files import router as files_router
from .transcriptions import router as transcriptions_router

__all__ = ["files_router", "transcriptions_router"]
