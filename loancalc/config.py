from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Rate solver (Newton-Raphson)
    rate_initial_guess: float = 0.05  # Annual, 5%
    rate_tolerance: float = 1e-6
    rate_max_iter: int = 100

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
