"""Main entry point for the Earthy AI relay API."""
import json
import logging
from typing import Any
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import PORT, LOG_LEVEL, LOG_FORMAT, CORS_ORIGINS, STRICT_CONFIG, validate_config
from logger import setup_logging
from models.api import RelayResult
from prompts import load_system_prompt
from services.chat_relay import ChatRelay
from services.enquiry_relay import EnquiryRelay
from services.llm_client import LLMClient
from services.email_client import EmailClient

# Initialize logging
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Earthy AI",
    description="Website chat and lead capture relay for trade businesses",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize relays (will be done on startup)
chat_relay: ChatRelay = None
enquiry_relay: EnquiryRelay = None


@app.on_event("startup")
async def startup_event():
    """Validate configuration and wire the relays."""
    global chat_relay, enquiry_relay

    setup_logging(LOG_LEVEL, LOG_FORMAT)
    logger.info("Initializing Earthy AI relays...")

    missing = validate_config()
    if missing and STRICT_CONFIG:
        raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")
    for name in missing:
        logger.warning(f"{name} is not set")

    llm_client = None
    try:
        llm_client = LLMClient()
    except ValueError as e:
        logger.warning(f"Chat relay running without completion client: {e}")

    email_client = None
    try:
        email_client = EmailClient()
    except ValueError as e:
        logger.warning(f"Enquiry relay running without email client: {e}")

    chat_relay = ChatRelay(llm_client, load_system_prompt())
    enquiry_relay = EnquiryRelay(email_client)
    logger.info("Relays initialized")


async def _read_body(request: Request) -> Any:
    """Parse the JSON body; an empty body counts as an empty object.

    Raises:
        ValueError: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    return json.loads(raw)


def _to_response(result: RelayResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness check."""
    return "Earthy AI backend running"


@app.post("/chat")
async def chat_endpoint(request: Request) -> JSONResponse:
    """
    Relay a visitor message to the completion API.

    Body: ``{"input": str, "history": [{"author": "user"|"ai", "text": str}, ...]}``

    Returns:
        ``{"reply": str, "history": [...]}`` with status 200, 400 or 500
    """
    if chat_relay is None:
        logger.error("Chat error: relay is not initialized")
        return _to_response(ChatRelay.server_error())

    try:
        body = await _read_body(request)
    except ValueError as e:
        logger.error(f"Chat error: request body is not valid JSON: {e}")
        return _to_response(ChatRelay.server_error())

    return _to_response(await chat_relay.handle(body))


@app.post("/lead")
async def lead_endpoint(request: Request) -> JSONResponse:
    """
    Forward a contact-form submission as a lead email.

    Returns:
        ``{"success": bool}`` with status 200, 400 or 500
    """
    if enquiry_relay is None:
        logger.error("Lead error: relay is not initialized")
        return _to_response(EnquiryRelay.server_error())

    try:
        body = await _read_body(request)
    except ValueError as e:
        logger.error(f"Lead error: request body is not valid JSON: {e}")
        return _to_response(EnquiryRelay.server_error())

    return _to_response(await enquiry_relay.handle(body))


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Earthy AI server on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
