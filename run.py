"""
Start the Snapfeed server: python run.py

Host and port come from settings (HOST / PORT, default 0.0.0.0:3000).
On Windows the ProactorEventLoop is used; uvicorn would otherwise switch to
SelectorEventLoop, which errors when clients disconnect mid-download of large media.
"""
import asyncio
import os
import sys

if __name__ == "__main__":
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

        # Prevent uvicorn from overriding back to SelectorEventLoop
        import uvicorn.loops.asyncio as uv_asyncio

        def _keep_policy(use_subprocess: bool = False) -> None:
            pass

        uv_asyncio.asyncio_setup = _keep_policy

    import uvicorn

    from snapfeed.core.config import settings

    uvicorn.run(
        "snapfeed.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=os.environ.get("UVICORN_RELOAD", "0") == "1",
        log_level=settings.LOG_LEVEL.lower(),
    )
