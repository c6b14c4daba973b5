# Path: core/assistant/consultant.py
# Purpose: Text "creative director" that brainstorms prompts for the active style.
# Layer: core/assistant.
# Details: Formats role-tagged instruct prompts for a hosted text-generation model.

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

from core.models.domain import ChatMessage, StyleProfile
from core.providers.huggingface import HuggingFaceClient

PROMPT_MARKER = "IMAGE_PROMPT:"
_ROLE_TAGS = {"assistant": "Assistant", "system": "System", "user": "User"}
_PROMPT_LINE = re.compile(rf"{PROMPT_MARKER}\s*(.+)")


def build_instruct_prompt(messages: Sequence[ChatMessage]) -> str:
    """One ``Role: content`` line per message, ending with an ``Assistant:`` cue."""

    lines = [f"{_ROLE_TAGS.get(message.role, 'User')}: {message.content}" for message in messages]
    lines.append("Assistant:")
    return "\n".join(lines)


def style_context(profile: Optional[StyleProfile]) -> str:
    if profile is None:
        return "No active style. Raw mode."
    moods = ", ".join(profile.moods) or "n/a"
    palette = ", ".join(profile.palette[:5]) or "n/a"
    return (
        f"Active style: {profile.name}. Technique: {profile.visual_technique}. "
        f"Moods: {moods}. Palette: {palette}."
    )


def system_prompt(today: date, profile: Optional[StyleProfile]) -> str:
    day = f"{today:%A}, {today:%B} {today.day}, {today.year}"
    return (
        f"You are PaletteAI's Creative Director. Today is {day}.\n\n"
        "Role: A concise, high-energy Digital Content Strategist.\n"
        "Goal: Brainstorm content ideas and output prompt suggestions for image generation.\n\n"
        "Rules:\n"
        "1) Speak strictly in English.\n"
        "2) BE CONCISE. Do not ramble.\n"
        f"3) When you suggest an image prompt, include a line that starts with: {PROMPT_MARKER} ...\n"
        "4) Keep prompts detailed (subject, setting, lighting, style, camera).\n\n"
        f"Context: {style_context(profile)}"
    )


@dataclass(frozen=True)
class ConsultantReply:
    text: str
    is_prompt: bool
    image_prompt: Optional[str] = None


def parse_reply(raw: str) -> ConsultantReply:
    """Strip the prompt marker for display and pull out the first suggested prompt."""

    match = _PROMPT_LINE.search(raw)
    return ConsultantReply(
        text=raw.replace(PROMPT_MARKER, "").strip(),
        is_prompt=PROMPT_MARKER in raw,
        image_prompt=match.group(1).strip() if match else None,
    )


class CreativeConsultant:
    """Ask the text model for ideas about the active style."""

    def __init__(
        self,
        client: HuggingFaceClient,
        model_id: str,
        max_new_tokens: int = 220,
        temperature: float = 0.7,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.client = client
        self.model_id = model_id
        self.max_new_tokens = max_new_tokens
        self.temperature = temperature
        self.today = today

    async def ask(self, user_text: str, active_profile: Optional[StyleProfile] = None) -> ConsultantReply:
        """
        Send one question with the style context and return the parsed reply.

        External calls:
        - core/providers/huggingface.py::HuggingFaceClient.text_generation - hosted text model.
        """

        messages = [
            ChatMessage(role="system", content=system_prompt(self.today(), active_profile)),
            ChatMessage(role="user", content=user_text),
        ]
        raw = await self.client.text_generation(
            self.model_id,
            build_instruct_prompt(messages),
            max_new_tokens=self.max_new_tokens,
            temperature=self.temperature,
        )
        return parse_reply(raw)
