from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	RATES_BASE_URL: str = 'https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies'
	RATES_TIMEOUT: float = 10.0

	# Logging
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
