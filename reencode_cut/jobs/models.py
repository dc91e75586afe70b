from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Cut(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    start: float = Field(ge=0)
    end: float | None = None

    @property
    def is_complete(self) -> bool:
        return self.end is not None

    @property
    def duration(self) -> float:
        if self.end is None:
            raise ValueError("cut has no end")
        return self.end - self.start


class CutOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    output_dir: str = "."
    audio_only: bool = False
    multi_cut_mode: Literal["merge", "separate"] = "separate"

    video_codec: str | None = None
    audio_codec: str | None = None
    video_bitrate: str | None = None
    audio_bitrate: str | None = None
    video_filters: list[str] | None = None
    audio_filters: list[str] | None = None
    video_preset: str | None = None
    video_framerate: str | None = None
    video_crf: str | None = None
    video_aspect_ratio: str | None = None
    extra_args: list[str] = Field(default_factory=list)

    transcoder: Literal["ffmpeg", "handbrake"] = "ffmpeg"

    stream_prefer_full_download: bool = False
    stream_keep_downloads: bool = False

    @model_validator(mode="before")
    @classmethod
    def _legacy_keys(cls, data: Any) -> Any:
        # older player scripts sent "encoder"/"bitrate" for the video track
        if isinstance(data, dict):
            data = dict(data)
            if not data.get("video_codec") and data.get("encoder"):
                data["video_codec"] = data["encoder"]
            if not data.get("video_bitrate") and data.get("bitrate"):
                data["video_bitrate"] = data["bitrate"]
        return data

    @field_validator("video_filters", "audio_filters", mode="before")
    @classmethod
    def _wrap_single_filter(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value] if value else None
        return value

    @field_validator("video_framerate", "video_crf", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def merge_requested(self) -> bool:
        return self.multi_cut_mode == "merge"


class StreamInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str
    direct_url: str | None = None
    duration: float = 0
    media_title: str | None = None


class JobDescription(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_directory: Path
    source_filename: str
    cuts: dict[str, Cut] = Field(default_factory=dict)
    options: CutOptions = Field(default_factory=CutOptions)
    stream_info: StreamInfo | None = None

    @property
    def is_streaming(self) -> bool:
        return self.stream_info is not None

    def sorted_cuts(self) -> list[Cut]:
        return sorted(self.cuts.values(), key=lambda c: c.start)

    def complete_cuts(self) -> list[Cut]:
        return [c for c in self.sorted_cuts() if c.is_complete]
