from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # "static" selects the static-export URL scheme; anything else is dynamic.
    deploy_target: str = "server"
    default_locale: str = "en"

    content_dir: Path = DATA_DIR / "content"
    messages_dir: Path = DATA_DIR / "messages"
    templates_dir: Path = BASE_DIR / "templates"
    static_dir: Path = BASE_DIR / "static"
    export_dir: Path = BASE_DIR / "out"

    site_name: str = "Islamux"
    site_title: str = "Islamux - Full-Stack Developer"
    site_description: str = (
        "Full-stack developer building modern web applications "
        "with Python, TypeScript and Flutter."
    )
    site_url: str = "https://islamux.me"
    author_email: str = "hello@islamux.me"
    github_url: str = "https://github.com/islamux"
    linkedin_url: str = ""

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_static_export(self) -> bool:
        """True when the build targets a static host."""
        return self.deploy_target.strip().lower() == "static"


settings = Settings()
