import os
import logging
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, HTTPException, Form
from fastapi.concurrency import run_in_threadpool
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field
from typing import Optional

from config import load_settings
from services import (
    EditorState,
    ExtractionError,
    OpenAIExtractor,
    PromptParts,
    PromptService,
    PromptValidationError,
)

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")

app = FastAPI(title="Kontext Prompt Engineer")
service = PromptService(OpenAIExtractor(settings))

# Serves the form's script and styles
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

class ComposeResponse(BaseModel):
    prompt: str

class ExtractResponse(BaseModel):
    success: bool
    parts: Optional[PromptParts] = None
    prompt: str = ""

class AssistRequest(BaseModel):
    state: EditorState = Field(default_factory=EditorState)
    raw_text: str = ""

class HealthResponse(BaseModel):
    status: str
    model: str

@app.get("/")
async def index():
    """Serves the prompt builder form."""
    return FileResponse(os.path.join(STATIC_DIR, "index.html"), media_type="text/html")

@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "ok", "model": settings.prompt_model}

@app.post("/compose", response_model=ComposeResponse)
async def compose(parts: PromptParts):
    """Builds the final Kontext prompt from the four form fields."""
    return {"prompt": service.compose(parts)}

@app.post("/extract", response_model=ExtractResponse)
async def extract(raw_text: str = Form("")):
    """Asks the AI assistant to fill the four fields from a casual description."""
    try:
        parts = await run_in_threadpool(service.extract, raw_text)
    except PromptValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ExtractionError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {"success": True, "parts": parts, "prompt": service.compose(parts)}

@app.post("/assist", response_model=EditorState)
async def assist(request: AssistRequest):
    """
    Runs one extraction against the editor state sent by the browser.

    Always answers 200: validation and assistant failures are reported in the
    returned state's `error`, with the submitted parts left as they were.
    """
    new_state = await run_in_threadpool(service.assist, request.state, request.raw_text)
    if new_state.error:
        logger.info("Assist finished with error: %s", new_state.error)
    return new_state

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
