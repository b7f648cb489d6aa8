from .asyncio_utils import run_async

__all__ = ["run_async"]
