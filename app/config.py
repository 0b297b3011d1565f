from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    llm_model: str = "gpt-4.1-mini"
    data_dir: str = "/data"
    storage_backend: str = "local"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    export_file_name: str = "social-media-strategy.pdf"
    empty_export_policy: Literal["skip", "blank"] = "skip"
    color_scheme: Literal["light", "dark"] = "light"

    # A4 세로, 단위는 pt
    page_width: float = 595.27
    page_height: float = 841.89
    margin: float = 40.0
    title_font_size: float = 20.0
    section_title_font_size: float = 14.0
    body_font_size: float = 11.0
    line_height_multiplier: float = 1.4
    record_separator_height: float = 24.0
    section_spacing: float = 10.0
    font_name: str = "Helvetica"
    bold_font_name: str = "Helvetica-Bold"

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


settings = Settings()
