from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="ROLLEXPR_", extra="ignore"
    )

    environment: str = "local"
    debug: bool = False

    # Output level used by the command line and interactive mode until overridden
    # by -v / -q or "set verbosity ...".
    verbosity: Literal["quiet", "default", "verbose"] = "default"

    # Fixed seed for reproducible rolls. Leave unset to draw from system entropy.
    seed: int | None = None

    # Front ends stop an expression after this many die draws so that
    # never-ending rerolls (2d6b6) and explosions (2d6v1) cannot hang them.
    # 0 disables the cap.
    max_draws: int = 100_000

    # Longest expression accepted by the HTTP API and interactive mode, in chars.
    max_expression_length: int = 1024


settings = Settings()
