from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path
import os


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 5000

    # Storage
    screenshots_dir: Path = Path("screenshots")
    submissions_file: Path = Path("submissions.jsonl")
    category_rules_file: Path | None = None  # JSON list of {label, keywords, tags}

    # Browser
    headless: bool = True
    desktop_width: int = 1440
    desktop_height: int = 900
    mobile_width: int = 450
    mobile_height: int = 844
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    )

    # Page preparation (milliseconds)
    navigation_timeout: int = 60000
    network_idle_timeout: int = 10000
    settle_delay: int = 3000
    auto_scroll: bool = True
    scroll_step: int = 400
    scroll_interval: int = 100
    max_scroll_distance: int = 15000
    max_scroll_iterations: int = 50

    # Extractor caps
    max_style_elements: int = 1500
    max_colors: int = 25
    max_fonts: int = 10
    max_tags: int = 10
    max_merged_tags: int = 20  # extracted tags plus rule tags
    category_text_limit: int = 6000

    # Screenshots
    webp_quality: int = 80
    max_full_page_height: int = 12000

    class Config:
        # Look for .env in the repo root (two levels up from backend/siteinsight/)
        # In containers env vars are injected directly so .env is optional
        _env_path = os.path.join(os.path.dirname(__file__), "..", "..", ".env")
        env_file = _env_path if os.path.exists(_env_path) else None
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings():
    return Settings()
