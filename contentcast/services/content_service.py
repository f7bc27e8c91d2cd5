"""
AI content generation through the Gemini REST API.

Covers full cast drafts (topic, format, tone), short direct answers with
Turkish/English detection, and image search suggestions.
"""

import asyncio
import re
from typing import Any, Dict, Optional

import aiohttp
import structlog

from contentcast.core.config import settings
from contentcast.core.exceptions import (
    ConfigurationError, ExternalServiceError, ValidationError
)
from contentcast.services.market_data_service import market_data_service, detect_crypto_topic

logger = structlog.get_logger(__name__)

MAX_OUTPUT_CHARS = 700
TRIMMED_OUTPUT_CHARS = 680
MAX_PARAGRAPHS = 2
FALLBACK_SEARCH_TERM = "technology"

# ============================================================================
# TEXT HELPERS
# ============================================================================

_EN_OVERRIDE = re.compile(r"\bwrite (it|the answer)? in english\b|\benglish only\b")
_TR_OVERRIDE = re.compile(r"(türkçe yaz|türkçe cevapla|cevabı türkçe yaz)")
# Patterns run on lowercased text. No IGNORECASE: Unicode folding maps "ı" onto "i".
_TR_CHARS = re.compile(r"[çğıöşü]")
_TR_WORDS = re.compile(
    r"\b(ve|bir|nedir|nasıl|için|hakkında|olarak|çok|daha|ama|fiyat|kadar)\b"
)
_EN_WORDS = re.compile(r"\b(the|and|what|how|why|is|are|with|about)\b")
_ASCII_ONLY = re.compile(r"^[\x00-\x7F\s]+$")


def detect_language(text: str) -> str:
    """Heuristic "tr" / "en" guess; explicit instructions in the text win."""
    txt = (text or "").lower()

    if _EN_OVERRIDE.search(txt):
        return "en"
    if _TR_OVERRIDE.search(txt):
        return "tr"

    if _TR_CHARS.search(txt) or _TR_WORDS.search(txt):
        return "tr"
    if _EN_WORDS.search(txt):
        return "en"

    return "en" if _ASCII_ONLY.match(txt) else "tr"


def enforce_short_output(text: str) -> str:
    """Strip list and heading markers, keep two paragraphs, cap the length."""
    if not text:
        return ""
    t = re.sub(r"^(\s*[-*]\s+)", "", text, flags=re.MULTILINE)
    t = re.sub(r"^(\s*\d+\.\s+)", "", t, flags=re.MULTILINE)
    t = re.sub(r"^#{1,6}\s+", "", t, flags=re.MULTILINE)

    paragraphs = [p.strip() for p in re.split(r"\n{2,}", t) if p.strip()]
    t = "\n\n".join(paragraphs[:MAX_PARAGRAPHS])

    if len(t) > MAX_OUTPUT_CHARS:
        t = re.sub(r"\s+\S*$", "", t[:TRIMMED_OUTPUT_CHARS]) + "…"
    return t


SHORT_RULES = {
    "tr": (
        "Aşağıdaki isteğe ÇOK KISA ve ÖZ yanıt ver. Kurallar:\n"
        "- SADECE 1 paragraf, maksimum 2-3 cümle.\n"
        "- Liste/madde işareti kullanma; akıcı düz metin yaz.\n"
        "- Gevezelik etme; çok kısa ve net ol.\n"
        "- Sosyal medya için uygun kısa içerik üret."
    ),
    "en": (
        "Respond VERY BRIEFLY and CLEARLY. Rules:\n"
        "- ONLY 1 paragraph, maximum 2-3 sentences.\n"
        "- Do not use lists or headings.\n"
        "- No fluff; be extremely concise and concrete.\n"
        "- Create short social media friendly content."
    ),
}

POST_SYSTEM_INSTRUCTION = (
    "You are a creative human content creator sharing genuine thoughts on Farcaster. "
    "Write naturally and authentically, like a real person would post. Use conversational "
    "language, personal touches and varied sentence structures. Include emojis where they "
    "feel right, not forced."
)

IMAGE_SEARCH_INSTRUCTION = (
    "You are an expert at creating search queries for stock photos. Based on content, "
    "generate a concise search term that would find relevant, professional images."
)

CONTENT_TYPE_GUIDANCE = {
    "educational": [
        "Share one interesting insight like you're explaining it to a curious friend",
        "Break it down in simple terms anyone can understand",
        "Maybe end with a thought that makes people curious",
    ],
    "news": [
        "Share the news like you're telling a friend something interesting",
        "Explain why it caught your attention or matters",
        "Use emojis that match the vibe of the news",
    ],
    "personal": [
        "Share from the heart, like you're talking to close friends",
        "Include a genuine takeaway or realization",
        "Make it personal but relatable",
    ],
    "analysis": [
        "Share one key insight that stood out to you",
        "Mention the data or trend that caught your eye",
        "Add your take on where this could be heading",
    ],
    "creative": [
        "Tell a quick story that pulls people in",
        "Use vivid details or imagery that feels fresh",
        "Wrap it up in a way that sticks with them",
    ],
}
DEFAULT_CONTENT_GUIDANCE = [
    "Create something people will want to share or respond to",
    "Keep it punchy but give them something to chew on",
    "Maybe ask something or invite them to join the conversation",
]

TONE_GUIDANCE = {
    "professional": [
        "Sound knowledgeable but keep it human and approachable",
        "Be credible without being stiff or corporate",
    ],
    "casual": [
        "Talk like you're chatting with friends over coffee",
        "Make it feel like a conversation, not a broadcast",
    ],
    "humorous": [
        "Add humor that feels natural, not forced",
        "Keep it playful but still give them something useful",
    ],
}
DEFAULT_TONE_GUIDANCE = [
    "Write clearly but with personality",
    "Give people something worth their time and attention",
]


def _bullets(lines) -> str:
    return "\n".join(f"- {line}" for line in lines)


def build_post_prompt(
    topic: str,
    content_type: str,
    tone: str,
    market_context: str = ""
) -> str:
    base = (
        f'Create a {content_type.lower()} about "{topic}" in a {tone.lower()} tone for Farcaster.'
    )
    if market_context:
        base += f" {market_context}"

    content_lines = CONTENT_TYPE_GUIDANCE.get(content_type.lower(), DEFAULT_CONTENT_GUIDANCE)
    tone_lines = TONE_GUIDANCE.get(tone.lower(), DEFAULT_TONE_GUIDANCE)

    return (
        f"{base}\n\n"
        f"Requirements:\n{_bullets(content_lines)}\n\n"
        f"Tone guidance:\n{_bullets(tone_lines)}\n\n"
        "Natural Writing Style:\n"
        "- Aim for 150-280 characters\n"
        "- Use contractions, casual phrases and natural expressions\n\n"
        "Write as if you're sharing with friends, not filling out a form."
    )


# ============================================================================
# SERVICE
# ============================================================================


class ContentService:
    """Gemini-backed text generation."""

    def __init__(self):
        self.api_url = settings.gemini_api_url
        self.model = settings.gemini_model
        self.timeout = aiohttp.ClientTimeout(total=max(settings.http_timeout_seconds, 30))
        self.logger = logger.bind(service="content_service")

    async def _generate(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        if not settings.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY missing in environment")

        body: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if system_instruction:
            body["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        url = f"{self.api_url}/models/{self.model}:generateContent"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(
                    url, params={"key": settings.gemini_api_key}, json=body
                ) as response:
                    if response.status != 200:
                        detail = await response.text()
                        self.logger.error(
                            "Gemini API error", status=response.status, body=detail[:200]
                        )
                        raise ExternalServiceError(
                            f"Gemini API error: {response.status}",
                            {"status": response.status}
                        )
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.error("Gemini request failed", error=str(e))
            raise ExternalServiceError("Failed to generate content") from e

        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    async def generate_post(self, topic: str, content_type: str, tone: str) -> str:
        market_context = ""
        if detect_crypto_topic(topic):
            market_context = await market_data_service.get_btc_context()

        prompt = build_post_prompt(topic, content_type, tone, market_context)
        content = await self._generate(prompt, POST_SYSTEM_INSTRUCTION)
        if not content:
            raise ExternalServiceError("No content generated")

        self.logger.info("Post generated", content_type=content_type, tone=tone, length=len(content))
        return content

    async def generate_short(self, prompt: str, lang: str = "") -> Dict[str, Any]:
        """Short direct answer; ``lang`` other than tr/en means auto-detect."""
        if not prompt:
            raise ValidationError("Prompt parameter is required")

        lang_final = lang if lang in ("tr", "en") else detect_language(prompt)
        final_prompt = f"{SHORT_RULES[lang_final]}\n\nUSER PROMPT:\n{prompt}"

        text = enforce_short_output(await self._generate(final_prompt))
        return {
            "ok": True,
            "provider": "gemini",
            "model": self.model,
            "lang": lang_final,
            "text": text,
            "content": text,
            "result": text,
            "message": text,
        }

    async def suggest_image_search(self, content: str) -> str:
        try:
            term = await self._generate(
                f'Generate a search term for finding relevant images for this content: "{content[:500]}"',
                IMAGE_SEARCH_INSTRUCTION
            )
        except (ConfigurationError, ExternalServiceError) as e:
            self.logger.warning("Image search suggestion failed", error=e.message)
            return FALLBACK_SEARCH_TERM
        return term.strip() or FALLBACK_SEARCH_TERM


# Global instance
content_service = ContentService()
