from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    app_name: str = "Local OCR Extractor"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Uploads
    upload_dir: Path = BACKEND_DIR / "uploads"
    max_file_size_mb: int = 20
    upload_chunk_size: int = 1024 * 1024

    # OCR
    ocr_language: str = "eng"
    tesseract_cmd: str | None = None
    ocr_timeout_seconds: float = 0

    # PDF rasterization
    pdf_render_scale: float = 2.0
    pdf_text_layer_first: bool = False

    # File generation
    pdf_font_name: str = "Helvetica"
    pdf_font_size: float = 12
    pdf_line_gap: float = 2
    docx_font_name: str = "Calibri"
    docx_font_size: float = 12
    docx_space_after_pt: float = 6
    download_chunk_size: int = 64 * 1024

    # Frontend
    static_dir: Path = BACKEND_DIR.parent / "dist"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


settings = Settings()
