from __future__ import annotations

import os
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError
from .wordlists import WordList

# Assumed worst-case word length when checking max_length up front.
ESTIMATED_WORD_LENGTH = 8

_TRUTHY = {"1", "true", "yes", "on"}


class GeneratorConfig(BaseModel):
    """Frozen generation settings. Builder methods hand back modified copies."""

    model_config = ConfigDict(frozen=True)

    lists: Tuple[WordList, ...] = Field(min_length=1)
    joiner: str = ""
    max_length: Optional[int] = None
    max_attempts: int = 100
    allow_duplicates: bool = False
    seed: Optional[int] = None

    def with_joiner(self, joiner: str) -> "GeneratorConfig":
        return self.model_copy(update={"joiner": joiner})

    def with_max_length(self, max_length: Optional[int]) -> "GeneratorConfig":
        return self.model_copy(update={"max_length": max_length})

    def with_max_attempts(self, max_attempts: int) -> "GeneratorConfig":
        return self.model_copy(update={"max_attempts": max_attempts})

    def with_seed(self, seed: Optional[int]) -> "GeneratorConfig":
        return self.model_copy(update={"seed": seed})

    def allowing_duplicates(self) -> "GeneratorConfig":
        return self.model_copy(update={"allow_duplicates": True})

    def accepts_length(self, candidate: str) -> bool:
        return self.max_length is None or len(candidate) < self.max_length

    def check_length_budget(self) -> None:
        if self.max_length is None:
            return
        if len(self.lists) * (ESTIMATED_WORD_LENGTH + len(self.joiner)) > self.max_length:
            raise ConfigurationError(
                "The max length must be greater or equal to "
                f"lists * ({ESTIMATED_WORD_LENGTH} + joiner length) = "
                f"{len(self.lists) * (ESTIMATED_WORD_LENGTH + len(self.joiner))}, got {self.max_length}"
            )


def _env_int(environ: Mapping[str, str], key: str) -> Optional[int]:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc


def apply_env_overrides(config: GeneratorConfig, environ: Optional[Mapping[str, str]] = None) -> GeneratorConfig:
    """Layer MEMORABLE_IDS_* environment variables over `config`."""

    env = os.environ if environ is None else environ
    updates: dict = {}
    if "MEMORABLE_IDS_JOINER" in env:
        updates["joiner"] = env["MEMORABLE_IDS_JOINER"]
    max_length = _env_int(env, "MEMORABLE_IDS_MAX_LENGTH")
    if max_length is not None:
        updates["max_length"] = max_length
    max_attempts = _env_int(env, "MEMORABLE_IDS_MAX_ATTEMPTS")
    if max_attempts is not None:
        updates["max_attempts"] = max_attempts
    if env.get("MEMORABLE_IDS_ALLOW_DUPLICATES", "").strip().lower() in _TRUTHY:
        updates["allow_duplicates"] = True
    seed = _env_int(env, "MEMORABLE_IDS_SEED")
    if seed is not None:
        updates["seed"] = seed
    return config.model_copy(update=updates) if updates else config


__all__ = ["ESTIMATED_WORD_LENGTH", "GeneratorConfig", "apply_env_overrides"]
