# Path: core/models/domain.py
# Purpose: Define domain models shared across analysis, generation, and library workflows.
# Layer: core/models.
# Details: Frozen dataclasses with dict converters simplify persistence and API serialization.

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal, Optional, Tuple

AspectRatio = Literal["1:1", "3:4", "4:3", "16:9"]
Resolution = Literal["1K", "2K", "4K"]
ChatRole = Literal["system", "user", "assistant"]

ASPECT_RATIOS: Tuple[str, ...] = ("1:1", "3:4", "4:3", "16:9")
RESOLUTIONS: Tuple[str, ...] = ("1K", "2K", "4K")


def now_ms() -> int:
    """Wall-clock timestamp in milliseconds, the unit used for every stored timestamp."""

    return int(time.time() * 1000)


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class StyleAnalysisResult:
    """Merged output of one style analysis run."""

    artistic_style: str
    visual_technique: str
    color_palette: List[str]
    mood_keywords: List[str]
    suggested_name: str
    reasoning: str
    embedding: Optional[List[float]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "artistic_style": self.artistic_style,
            "visual_technique": self.visual_technique,
            "color_palette": list(self.color_palette),
            "mood_keywords": list(self.mood_keywords),
            "suggested_name": self.suggested_name,
            "reasoning": self.reasoning,
            "embedding": list(self.embedding) if self.embedding is not None else None,
        }


@dataclass(frozen=True)
class StyleData:
    """Editable attributes of a style profile; what a history snapshot captures."""

    name: str
    description: str
    visual_technique: str
    palette: Tuple[str, ...] = ()
    moods: Tuple[str, ...] = ()
    reference_images: Tuple[str, ...] = ()
    embedding: Optional[Tuple[float, ...]] = None
    reasoning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "visual_technique": self.visual_technique,
            "palette": list(self.palette),
            "moods": list(self.moods),
            "reference_images": list(self.reference_images),
            "embedding": list(self.embedding) if self.embedding is not None else None,
            "reasoning": self.reasoning,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StyleData":
        embedding = payload.get("embedding")
        return cls(
            name=str(payload.get("name", "")),
            description=str(payload.get("description", "")),
            visual_technique=str(payload.get("visual_technique", "")),
            palette=tuple(payload.get("palette") or ()),
            moods=tuple(payload.get("moods") or ()),
            reference_images=tuple(payload.get("reference_images") or ()),
            embedding=tuple(float(x) for x in embedding) if embedding is not None else None,
            reasoning=payload.get("reasoning"),
        )


@dataclass(frozen=True)
class StyleSnapshot:
    """Pre-change state of a profile recorded by an edit or revert."""

    version: int
    timestamp: int
    change_log: str
    data: StyleData

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "timestamp": self.timestamp,
            "change_log": self.change_log,
            "data": self.data.to_dict(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StyleSnapshot":
        return cls(
            version=int(payload["version"]),
            timestamp=int(payload.get("timestamp", 0)),
            change_log=str(payload.get("change_log", "")),
            data=StyleData.from_dict(payload.get("data") or {}),
        )


@dataclass(frozen=True)
class StyleProfile:
    """Persisted style with its version counter and most-recent-first history."""

    id: str
    name: str
    description: str
    visual_technique: str
    palette: Tuple[str, ...] = ()
    moods: Tuple[str, ...] = ()
    reference_images: Tuple[str, ...] = ()
    created_at: int = field(default_factory=now_ms)
    embedding: Optional[Tuple[float, ...]] = None
    reasoning: Optional[str] = None
    version: int = 1
    history: Tuple[StyleSnapshot, ...] = ()

    @classmethod
    def from_analysis(cls, analysis: StyleAnalysisResult, reference_images: List[str]) -> "StyleProfile":
        """Create a version 1 profile with empty history from an analysis result."""

        return cls(
            id=new_id(),
            name=analysis.suggested_name,
            description=analysis.artistic_style,
            visual_technique=analysis.visual_technique,
            palette=tuple(analysis.color_palette),
            moods=tuple(analysis.mood_keywords),
            reference_images=tuple(reference_images),
            embedding=tuple(analysis.embedding) if analysis.embedding is not None else None,
            reasoning=analysis.reasoning,
        )

    def data(self) -> StyleData:
        return StyleData(
            name=self.name,
            description=self.description,
            visual_technique=self.visual_technique,
            palette=self.palette,
            moods=self.moods,
            reference_images=self.reference_images,
            embedding=self.embedding,
            reasoning=self.reasoning,
        )

    def snapshot(self, change_log: str, timestamp: Optional[int] = None) -> StyleSnapshot:
        return StyleSnapshot(
            version=self.version,
            timestamp=now_ms() if timestamp is None else timestamp,
            change_log=change_log,
            data=self.data(),
        )

    def committed(self, data: StyleData, change_log: str) -> "StyleProfile":
        """
        Return the next version of this profile carrying ``data``.

        The current state is pushed to the front of the history; the receiver is left untouched.
        """

        return replace(
            self,
            name=data.name,
            description=data.description,
            visual_technique=data.visual_technique,
            palette=tuple(data.palette),
            moods=tuple(data.moods),
            reference_images=tuple(data.reference_images),
            embedding=data.embedding,
            reasoning=data.reasoning,
            version=self.version + 1,
            history=(self.snapshot(change_log),) + self.history,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = self.data().to_dict()
        payload.update(
            {
                "id": self.id,
                "created_at": self.created_at,
                "version": self.version,
                "history": [snapshot.to_dict() for snapshot in self.history],
            }
        )
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StyleProfile":
        data = StyleData.from_dict(payload)
        return cls(
            id=str(payload["id"]),
            name=data.name,
            description=data.description,
            visual_technique=data.visual_technique,
            palette=data.palette,
            moods=data.moods,
            reference_images=data.reference_images,
            created_at=int(payload.get("created_at", 0)),
            embedding=data.embedding,
            reasoning=data.reasoning,
            version=int(payload.get("version", 1)),
            history=tuple(StyleSnapshot.from_dict(item) for item in payload.get("history") or ()),
        )


@dataclass(frozen=True)
class GeneratedImage:
    """One rendered image and the prompts that produced it."""

    id: str
    url: str
    prompt: str
    fused_prompt: str
    style_id: str
    timestamp: int
    aspect_ratio: str
    resolution: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "prompt": self.prompt,
            "fused_prompt": self.fused_prompt,
            "style_id": self.style_id,
            "timestamp": self.timestamp,
            "aspect_ratio": self.aspect_ratio,
            "resolution": self.resolution,
        }


@dataclass(frozen=True)
class ChatMessage:
    """A role-tagged message sent to the text model."""

    role: ChatRole
    content: str
