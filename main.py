import inspect
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from openai import AsyncOpenAI

from routes.design_route import router as design_router
from services.session_store import SessionStore

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file if present

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def build_openai_client() -> AsyncOpenAI:
    """Create the shared OpenAI client, refusing to start without a key."""
    openai_api_key = os.getenv("OPENAI_API_KEY")
    if not openai_api_key:
        raise RuntimeError("OPENAI_API_KEY environment variable is not set")

    try:
        return AsyncOpenAI(
            api_key=openai_api_key,
            timeout=float(os.getenv("OPENAI_TIMEOUT_SECONDS", "120")),
            max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
        )
    except Exception as exc:
        raise RuntimeError("Failed to initialize OpenAI Async client") from exc


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - the in-memory design session store
      - the OpenAI async client
    and attach them to `app.state`.
    """
    app.state.session_store = SessionStore()
    app.state.openai_client = build_openai_client()

    try:
        yield
    finally:
        # Gracefully close the OpenAI client if it exposes a close/aclose method.
        client = getattr(app.state, "openai_client", None)
        if client is not None:
            aclose = getattr(client, "aclose", None) or getattr(client, "close", None)
            if aclose is not None:
                try:
                    if inspect.iscoroutinefunction(aclose):
                        await aclose()
                    else:
                        result = aclose()
                        if inspect.isawaitable(result):
                            await result
                except Exception as exc:
                    logging.warning("Error while closing OpenAI client: %s", exc)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(title="Product Design Studio", lifespan=lifespan)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check reporting OpenAI client presence and open sessions.
        """
        has_openai = (
            hasattr(request.app.state, "openai_client")
            and request.app.state.openai_client is not None
        )
        store = getattr(request.app.state, "session_store", None)
        return {"ok": True, "openai_available": has_openai, "sessions": len(store) if store else 0}

    app.include_router(design_router)

    return app


app = create_app()
