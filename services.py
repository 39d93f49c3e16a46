import json
import logging
from abc import ABC, abstractmethod
from typing import Optional

from openai import OpenAI
from pydantic import BaseModel, Field, field_validator

from config import DEFAULT_USER_AGENT, Settings
from prompts import PROMPTS, EXTRACTION_FUNCTION

logger = logging.getLogger(__name__)

PART_FIELDS = ("target", "change", "preserve", "style")

VALIDATION_MESSAGE = "Please enter a description so the AI assistant can analyse it."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while contacting the AI assistant."
BUSY_MESSAGE = "The AI assistant is still analysing the previous request."


class PromptValidationError(ValueError):
    """Raised for input that must not be sent to the AI assistant."""


class ExtractionError(RuntimeError):
    """Raised when the AI assistant call or its answer fails."""


class PromptParts(BaseModel):
    target: str = ""
    change: str = ""
    preserve: str = ""
    style: str = ""

    @field_validator(*PART_FIELDS, mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class EditorState(BaseModel):
    parts: PromptParts = Field(default_factory=PromptParts)
    prompt: str = ""
    loading: bool = False
    error: Optional[str] = None


def compose_prompt(parts: PromptParts) -> str:
    """Joins the four parts into one Kontext instruction.

    Returns an empty string when both target and change are blank; preserve
    and style alone never produce a sentence.
    """
    target = parts.target.strip()
    change = parts.change.strip()
    preserve = parts.preserve.strip()
    style = parts.style.strip()

    if not target and not change:
        return ""

    prompt = PROMPTS.FINAL_PREFIX.format(target=target)
    if change:
        prompt += PROMPTS.FINAL_CHANGE.format(change=change)
    if preserve:
        prompt += PROMPTS.FINAL_PRESERVE.format(preserve=preserve)
    if style:
        prompt += PROMPTS.FINAL_STYLE.format(style=style)
    else:
        prompt += PROMPTS.FINAL_END
    return prompt


def parse_answer(answer: str) -> PromptParts:
    """Maps the assistant's JSON answer onto PromptParts, ignoring extra keys."""
    data = json.loads(answer)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return PromptParts(**{name: _field_text(data.get(name)) for name in PART_FIELDS})


def _field_text(value) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class Extractor(ABC):
    """Turns a casual edit description into PromptParts."""

    @abstractmethod
    def extract(self, raw_text: str) -> PromptParts:
        ...


class OpenAIExtractor(Extractor):
    def __init__(self, settings: Settings, client: Optional[OpenAI] = None):
        self.model = settings.prompt_model
        self.client = client or OpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            default_headers={"User-Agent": DEFAULT_USER_AGENT},
        )

    def build_request(self, raw_text: str) -> dict:
        content = PROMPTS.USER_REQUEST.format(
            instruction=PROMPTS.EXTRACTION_INSTRUCTION,
            user_input=raw_text,
        )
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": content}],
            "tools": [{"type": "function", "function": EXTRACTION_FUNCTION}],
            "tool_choice": {"type": "function", "function": {"name": EXTRACTION_FUNCTION["name"]}},
        }

    def extract(self, raw_text: str) -> PromptParts:
        """Calls the assistant once; any failure is wrapped in ExtractionError."""
        try:
            response = self.client.chat.completions.create(**self.build_request(raw_text))
            parts = parse_answer(self._answer_text(response))
        except Exception as e:
            logger.exception("Error calling the AI assistant")
            message = str(e)
            if message:
                raise ExtractionError(f"Failed to generate prompt structure: {message}") from e
            raise ExtractionError(UNKNOWN_ERROR_MESSAGE) from e

        logger.info("Extracted prompt parts with %s", self.model)
        return parts

    @staticmethod
    def _answer_text(response) -> str:
        message = response.choices[0].message
        if message.tool_calls:
            return message.tool_calls[0].function.arguments
        # Some compatible endpoints ignore tool_choice and answer in plain JSON.
        return message.content or ""


class PromptService:
    def __init__(self, extractor: Extractor):
        self.extractor = extractor

    def compose(self, parts: PromptParts) -> str:
        return compose_prompt(parts)

    def extract(self, raw_text: str) -> PromptParts:
        """Rejects blank input before the assistant is contacted."""
        if not raw_text or not raw_text.strip():
            raise PromptValidationError(VALIDATION_MESSAGE)
        return self.extractor.extract(raw_text)

    def assist(self, state: EditorState, raw_text: str) -> EditorState:
        """
        Runs one extraction against the given editor state and returns the next state.

        The previous error is cleared first. On failure the returned state keeps
        the original parts and carries exactly one error message; the input
        state is never modified.
        """
        if state.loading:
            kept = state.parts.model_copy()
            return EditorState(parts=kept, prompt=compose_prompt(kept), loading=True, error=BUSY_MESSAGE)

        try:
            parts = self.extract(raw_text)
        except (PromptValidationError, ExtractionError) as e:
            kept = state.parts.model_copy()
            return EditorState(parts=kept, prompt=compose_prompt(kept), error=str(e))

        return EditorState(parts=parts, prompt=compose_prompt(parts))
