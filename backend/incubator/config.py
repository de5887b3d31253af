from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Report API (consumed as a black box)
    api_base_url: str = "http://localhost:3000"
    api_token: str = ""  # Bearer token sent with every report request
    api_timeout_seconds: float = 30.0

    # Export output
    report_output_dir: str = "./reports"

    # Report history (bounded, newest first)
    report_history_path: str = "./.report_history.json"
    report_history_key: str = "incubationos_report_history"
    report_history_limit: int = 50

    # Branding
    brand_config_path: str = ""  # Optional brand.json overriding the default theme
    logo_source: str = ""  # File path or http(s) URL; empty disables the logo

    # PDF rasterization
    pdf_viewport_width: int = 1200
    pdf_scale: int = 2
    pdf_settle_ms: int = 800

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
