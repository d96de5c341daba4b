"""Library settings: environment variables and code defaults in one frozen object.

Priority chain (highest to lowest):
  1. Init kwargs: an explicit ``ConstaggSettings(...)`` passed to a scan
  2. Env vars: ``CONSTAGG_*`` prefix
  3. Code defaults

The settings only tune how sources are scanned and how the library logs; they never hold the
aggregated constants themselves.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class ConstaggSettings(BaseSettings):
    """Settings for member scanning and logging.

    Attributes:
        uppercase_constants: Treat PEP 8 upper-case names (``MAX_SIZE``) as constants even
            without a ``Final`` annotation.
        include_private: Consider names starting with an underscore.
        verbose: Enable DEBUG-level output for the ``constagg`` logger.
        log_json: Render log lines as JSON instead of the console renderer.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CONSTAGG_",
    }

    uppercase_constants: bool = Field(default=True)
    include_private: bool = Field(default=True)
    verbose: bool = False
    log_json: bool = False


@lru_cache(maxsize=1)
def get_settings() -> ConstaggSettings:
    """Return the process-wide settings, read from the environment once."""
    return ConstaggSettings()
