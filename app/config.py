from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/weightcoach"
    default_tz: str = "Africa/Addis_Ababa"
    coach_api_key: str | None = None
    log_level: str = "INFO"

    # AI advice (Gemini). Empty key -> advice endpoint answers with the not-configured fallback.
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_request_timeout_seconds: int = 60

    # BMI gauge maps [bmi_gauge_min, bmi_gauge_max] onto 0–100
    bmi_gauge_min: float = 10.0
    bmi_gauge_max: float = 40.0
    # Ideal weight range = ideal_bmi_* × height_m²
    ideal_bmi_low: float = 18.5
    ideal_bmi_high: float = 24.9

    chart_recent_entries: int = 7  # Points on the dashboard weight chart

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
