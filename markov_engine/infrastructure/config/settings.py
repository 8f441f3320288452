from typing import Optional, Literal
from pydantic import BaseModel, Field
import os


class LoggingSettings(BaseModel):
    """Logging configuration, overridable from the environment"""
    log_level: str = Field(default="WARNING", description="Root log level")
    log_format: Literal["json", "console"] = Field(default="console")
    service_name: str = Field(default="markov-engine")
    environment: str = Field(default="development")

    @classmethod
    def from_env(cls, **overrides) -> "LoggingSettings":
        """Build settings from MARKOV_* environment variables, then apply overrides"""
        values = {
            "log_level": os.getenv("MARKOV_LOG_LEVEL", "WARNING"),
            "log_format": os.getenv("MARKOV_LOG_FORMAT", "console"),
            "service_name": os.getenv("MARKOV_SERVICE_NAME", "markov-engine"),
            "environment": os.getenv("ENVIRONMENT", "development"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


class TweetGeneratorConfig(BaseModel):
    """Run parameters of the tweet generator"""
    seed: int = Field(description="Seed of the run's random source")
    num_tweets: int = Field(ge=0, description="Number of tweets to generate")
    corpus_path: str = Field(min_length=1, description="Path of the text corpus")
    words_to_read: Optional[int] = Field(None, ge=0, description="Read at most this many words")
    max_words_in_tweet: int = Field(default=20, ge=1)


class SnakesAndLaddersConfig(BaseModel):
    """Run parameters of the snakes and ladders simulator"""
    seed: int = Field(description="Seed of the run's random source")
    num_paths: int = Field(ge=0, description="Number of random walks to print")
    max_generation_length: int = Field(default=60, ge=1)
    board_size: int = Field(default=100, ge=2)
