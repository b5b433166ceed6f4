"""
Configuration settings for the Word Scramble server.
Loads environment variables and defines constants.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).resolve().parent / 'data'


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Word sources
    root_words_path: Path = Field(default=DATA_DIR / 'start.txt', validation_alias='ROOT_WORDS_PATH')
    dictionary_path: Optional[Path] = Field(default=None, validation_alias='DICTIONARY_PATH')
    # wordfreq Zipf floor when no DICTIONARY_PATH is given
    min_word_zipf: float = Field(default=1.5, validation_alias='MIN_WORD_ZIPF')

    # Fixed seed makes root word selection reproducible
    random_seed: Optional[int] = Field(default=None, validation_alias='RANDOM_SEED')

    # Server
    host: str = Field(default='127.0.0.1', validation_alias='HOST')
    port: int = Field(default=8000, validation_alias='PORT')

    # Logging
    dev_mode: bool = Field(default=False, validation_alias='DEV_MODE')
    log_dir: Optional[Path] = Field(default=None, validation_alias='LOG_DIR')

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )


# Global settings instance
SETTINGS = Settings()

# Used when the root word pool is empty
DEFAULT_ROOT_WORD = 'silkworm'

# Logger names
LOGGER_NAME_MAIN = 'wordscramble.main'
LOGGER_NAME_GAME = 'wordscramble.game'
LOGGER_NAME_DICT = 'wordscramble.dictionary'
