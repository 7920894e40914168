from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "IMMO_"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Sensitivity sweeps
    sweep_max_workers: int = 4  # 1 = run variants serially
    projection_cache_size: int = 256

    # Non-convergent IRR becomes NaN in sweep metrics (rendered as "N/A")
    strict_irr_metrics: bool = True


settings = Settings()
