"""Generative model clients: Gemini and a scripted offline stand-in."""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Iterable, List, Union

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from PIL import Image, UnidentifiedImageError

from logic.errors import GenerationFailed
from tools.observability import instrument_tool

LOGGER = logging.getLogger(__name__)


class GenerativeClient(ABC):
    """Narrow text-generation capability injected into agents."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return the raw response text for a prompt."""

    @abstractmethod
    def generate_with_image(self, prompt: str, image_bytes: bytes) -> str:
        """Return the raw response text for a prompt plus one image."""


class GeminiClient(GenerativeClient):
    """Google Gemini client; one round trip per call, no retries."""

    def __init__(self, api_key: str | None, model: str = "gemini-1.5-flash") -> None:
        self.model_name = model
        self.api_key = api_key
        if not api_key:
            LOGGER.warning("GEMINI_API_KEY is not set; generation calls will fail")
            self._model = None
            return
        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(model)

    def _generate(self, contents: list) -> str:
        if self._model is None:
            raise GenerationFailed("Generative model is not configured (missing API key)")
        try:
            response = self._model.generate_content(contents)
            return response.text
        except google_exceptions.GoogleAPIError as exc:
            raise GenerationFailed(f"Gemini request failed: {exc}") from exc
        except ValueError as exc:
            # Raised by ``response.text`` when the candidate was blocked or empty.
            raise GenerationFailed(f"Gemini returned no usable text: {exc}") from exc

    @instrument_tool("gemini_generate")
    def generate(self, prompt: str) -> str:
        return self._generate([prompt])

    @instrument_tool("gemini_generate_with_image")
    def generate_with_image(self, prompt: str, image_bytes: bytes) -> str:
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise GenerationFailed("Image could not be decoded for analysis") from exc
        return self._generate([prompt, image])


ScriptedResponse = Union[str, Exception]


class ScriptedGenerativeClient(GenerativeClient):
    """Offline deterministic client returning queued responses in order.

    Queued exceptions are raised instead of returned. Every prompt is recorded
    in ``prompts`` so callers can assert how often the model was called.
    """

    def __init__(self, responses: Iterable[ScriptedResponse] = (), default: str | None = None) -> None:
        self._responses: Deque[ScriptedResponse] = deque(responses)
        self.default = default
        self.prompts: List[str] = []
        self.images: List[bytes] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    def queue(self, response: ScriptedResponse) -> None:
        self._responses.append(response)

    def _next(self) -> str:
        if self._responses:
            response = self._responses.popleft()
        elif self.default is not None:
            response = self.default
        else:
            raise GenerationFailed("No scripted response left")
        if isinstance(response, Exception):
            raise response
        return response

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self._next()

    def generate_with_image(self, prompt: str, image_bytes: bytes) -> str:
        self.prompts.append(prompt)
        self.images.append(image_bytes)
        return self._next()


__all__ = ["GenerativeClient", "GeminiClient", "ScriptedGenerativeClient"]
