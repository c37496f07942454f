from functools import lru_cache

from pydantic_settings import BaseSettings

from .schemas import EngineSettings


class Settings(BaseSettings):
    APP_NAME: str = "LumberSuite"
    LOG_LEVEL: str = "INFO"

    # Engine defaults, passed into the calculators and never read by them
    BF_PRECISION: int = 4
    DEFAULT_YIELD_PCT: float = 95.0
    DEFAULT_WASTE_PCT: float = 5.0
    REQUIRE_DIMENSIONS: bool = False
    ENFORCE_TALLY_FIFO: bool = True
    ENABLE_TALLY: bool = True

    class Config:
        env_file = ".env"

    def engine_settings(self) -> EngineSettings:
        """Immutable snapshot handed to the engine for one request."""
        return EngineSettings(
            bf_precision=self.BF_PRECISION,
            default_yield_pct=self.DEFAULT_YIELD_PCT,
            default_waste_pct=self.DEFAULT_WASTE_PCT,
            require_dimensions=self.REQUIRE_DIMENSIONS,
            enforce_tally_fifo=self.ENFORCE_TALLY_FIFO,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
