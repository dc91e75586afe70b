import tempfile
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_TMP_ROOT = Path(tempfile.gettempdir())


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_ENV_PATH, env_file_encoding="utf-8", extra="ignore")

    REENCODE_CUT_TEMP_DIR: str = str(_TMP_ROOT / "mpv-reencode-cut-temp")
    REENCODE_CUT_LOGS_DIR: str = str(_TMP_ROOT / "mpv-reencode-cut-logs")

    REENCODE_CUT_TEMP_MAX_AGE_HOURS: float = 24
    REENCODE_CUT_TEMP_MAX_SIZE_BYTES: int = 10 * 1024 ** 3

    REENCODE_CUT_DOWNLOAD_PAD_SECONDS: float = 10
    REENCODE_CUT_PARTIAL_DOWNLOAD_ENABLED: bool = True
    REENCODE_CUT_DOWNLOADERS: str = "yt-dlp,youtube-dl"

    REENCODE_CUT_FFMPEG_BIN: str = "ffmpeg"
    REENCODE_CUT_HANDBRAKE_BIN: str = "HandBrakeCLI"
    REENCODE_CUT_PROCESS_TIMEOUT: float | None = None

    @property
    def downloader_candidates(self) -> list[str]:
        return [c.strip() for c in self.REENCODE_CUT_DOWNLOADERS.split(",") if c.strip()]


settings = Settings()
