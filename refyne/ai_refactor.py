"""
AI-powered refactor guidance using Google Gemini API.
"""

import os
import re
import json
import time
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import google.generativeai as genai
from dotenv import load_dotenv

from .config import DEFAULT_GEMINI_MODELS, MODEL_INVENTORY_TTL_SECONDS, REFACTOR_SCHEMA
from .exceptions import RefactorRequestError, RefactorUnavailableError

logger = logging.getLogger(__name__)

FLASH_PATTERN = re.compile(r"(flash|flash-lite|flash-latest)", re.IGNORECASE)
EMBEDDED_JSON_PATTERN = re.compile(r"({[\s\S]*}|\[[\s\S]*\])")
CODE_FENCE_PATTERN = re.compile(r"```[\s\S]*?```")

# =============================================================================
# MODEL CANDIDATES
# =============================================================================

def normalize_model_name(value: Optional[str]) -> str:
    """Strip the 'models/' prefix the API puts on model names."""
    if not value:
        return ""
    return re.sub(r"^models/", "", value).strip()

def order_candidates(requested: Iterable[Optional[str]], available: Iterable[str]) -> List[str]:
    """
    Merge requested model names with the account's model inventory.

    With a known inventory, requested models that exist come first, then the
    remaining requested models, then everything else the inventory offers.
    Without one, the requested order is kept. Duplicates are dropped.
    """
    requested = [name for name in requested if name]
    available = [normalize_model_name(name) for name in available]
    available_set = set(available)

    seen = set()
    ordered = []

    def push(candidate):
        normalized = normalize_model_name(candidate)
        if normalized and normalized not in seen:
            seen.add(normalized)
            ordered.append(normalized)

    if available_set:
        for name in requested:
            if normalize_model_name(name) in available_set:
                push(name)
        for name in requested:
            if normalize_model_name(name) not in available_set:
                push(name)
        for name in available:
            push(name)
    else:
        for name in requested:
            push(name)
    return ordered

def prefer_flash(candidates: Iterable[str]) -> List[str]:
    """Stable reorder putting flash-family models first."""
    return sorted(candidates, key=lambda name: 0 if FLASH_PATTERN.search(name) else 1)

# =============================================================================
# PROMPT AND RESPONSE HANDLING
# =============================================================================

def build_refactor_prompt(snapshot: Dict[str, Any]) -> str:
    """Prompt asking for refactor guidance on one history snapshot."""
    return (
        "You are an experienced software architect.\n"
        "Analyze the following project metrics and structure:\n"
        f"{json.dumps(snapshot, indent=2)}\n\n"
        "Identify weaknesses (e.g., poor modularization, duplicate code, lack of documentation).\n"
        "Suggest improvements in architecture and design.\n"
        "Show 1-2 example refactors (as full file code blocks).\n"
        "Return your response strictly as a JSON object matching this schema: "
        f"{json.dumps(REFACTOR_SCHEMA)}"
    )

def normalize_refactor_payload(payload: Any) -> Dict[str, Any]:
    """Coerce any parsed response into {summary, issues, suggestions, refactoredFiles}."""
    if not isinstance(payload, dict):
        payload = {}
    summary = payload.get("summary")
    if not isinstance(summary, str):
        summary = str(summary) if summary else ""

    def as_list(key):
        value = payload.get(key)
        return value if isinstance(value, list) else []

    return {
        "summary": summary,
        "issues": as_list("issues"),
        "suggestions": as_list("suggestions"),
        "refactoredFiles": as_list("refactoredFiles"),
    }

def parse_refactor_response(raw_text: Optional[str]) -> Dict[str, Any]:
    """
    Turn model output into a refactor payload.

    Tries strict JSON first, then the first embedded {...} or [...] block.
    Plain prose falls back to a summary-only payload with code fences removed.
    """
    raw_text = raw_text or ""
    try:
        return normalize_refactor_payload(json.loads(raw_text))
    except ValueError:
        pass

    match = EMBEDDED_JSON_PATTERN.search(raw_text)
    if match:
        try:
            return normalize_refactor_payload(json.loads(match.group(0)))
        except ValueError:
            pass

    return normalize_refactor_payload({"summary": CODE_FENCE_PATTERN.sub("", raw_text).strip()})

# =============================================================================
# CLIENT
# =============================================================================

def _default_model_factory(model_name: str):
    return genai.GenerativeModel(model_name)

def _default_inventory_loader() -> List[str]:
    return [
        m.name for m in genai.list_models()
        if 'generateContent' in m.supported_generation_methods
    ]


class GeminiRefactorClient:
    """
    Requests refactor guidance from the first Gemini model that answers.

    `model_factory` and `inventory_loader` default to the google-generativeai
    SDK and can be replaced in tests.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        preferred_model: Optional[str] = None,
        model_factory: Optional[Callable[[str], Any]] = None,
        inventory_loader: Optional[Callable[[], List[str]]] = None,
    ):
        load_dotenv()
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        self.preferred_model = preferred_model
        self.model_factory = model_factory or _default_model_factory
        self.inventory_loader = inventory_loader or _default_inventory_loader
        self._configured = False
        self._inventory: Optional[List[str]] = None
        self._inventory_timestamp = 0.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _configure(self):
        if not self._configured:
            genai.configure(api_key=self.api_key)
            self._configured = True

    def available_models(self) -> List[str]:
        """Model inventory of the account, cached for a few minutes. Empty on failure."""
        if not self.is_configured:
            return []
        now = time.time()
        if self._inventory is not None and now - self._inventory_timestamp < MODEL_INVENTORY_TTL_SECONDS:
            return self._inventory
        try:
            self._configure()
            names = [normalize_model_name(name) for name in self.inventory_loader()]
        except Exception as e:
            logger.warning("Error listing Gemini models: %s", e)
            return []
        self._inventory = [name for name in names if name]
        self._inventory_timestamp = now
        return self._inventory

    def model_candidates(self) -> List[str]:
        requested = [self.preferred_model, os.getenv("GEMINI_MODEL")] + DEFAULT_GEMINI_MODELS
        return prefer_flash(order_candidates(requested, self.available_models()))

    def request_refactor(self, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """
        Ask Gemini for refactor guidance on a history snapshot.

        Raises:
            RefactorUnavailableError: no API key, or no candidate models.
            RefactorRequestError: every candidate failed.
        """
        if not self.is_configured:
            raise RefactorUnavailableError(
                "Gemini integration is not configured. Set GEMINI_API_KEY.")

        candidates = self.model_candidates()
        if not candidates:
            raise RefactorUnavailableError("No Gemini models available.")
        logger.info("Gemini candidates: %s", ", ".join(candidates))

        self._configure()
        prompt = build_refactor_prompt(snapshot)
        last_error = None
        for candidate in candidates:
            try:
                logger.info("Requesting Gemini refactor via model: %s", candidate)
                response = self.model_factory(candidate).generate_content(prompt)
                return parse_refactor_response(response.text)
            except Exception as e:
                last_error = e
                logger.error("Gemini request failed for model %s: %s", candidate, e)

        raise RefactorRequestError(
            "Failed to fetch refactor guidance from Gemini. Check model availability and API key.",
            last_error,
        )
