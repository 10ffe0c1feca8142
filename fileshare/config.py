from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    app_name: str = 'File Share'
    app_host: str = '0.0.0.0'
    app_port: int = Field(default=8080, ge=1, le=65535)
    base_dir: str = '.'
    chunk_size: int = Field(default=1024 * 1024, ge=4096, le=64 * 1024 * 1024)
    log_level: str = Field(default='info', pattern='(?i)^(critical|error|warning|info|debug)$')


settings = Settings()
