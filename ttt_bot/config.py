from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Shared secret echoed back to the game server
    secret: str = ""
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"

    # Debug: dump the first search plies of each turn as a Graphviz file
    debug: bool = False
    dot_path: str = "log.dot"

    # Seeds the random fallback of the move selector (None = nondeterministic)
    random_seed: int | None = None

    model_config = SettingsConfigDict(
        env_prefix="TTT_BOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
