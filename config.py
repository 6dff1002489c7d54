"""
config.py — Library configuration through environment variables.
All variables carry the RINGREADER_ prefix.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Each nesting level costs about three interpreter frames; this keeps a full-depth
# parse well inside Python's default recursion limit of 1000.
MAX_NESTING_DEPTH = 250


class Settings(BaseSettings):
    # Recursion guard: nesting depth of delimiters and unary operators
    max_nesting_depth: int = Field(default=200, ge=1, le=MAX_NESTING_DEPTH)

    # Tags skipped by the expression readers
    ignorable_tags: list[str] = ["blancks", "space", "carriage_return", "new_line", "tab"]

    # Tag of the terminal symbol closing every stream
    end_of_stream_tag: str = "eof"

    model_config = SettingsConfigDict(env_prefix="RINGREADER_", env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
