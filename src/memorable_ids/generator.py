"""Memorable id generation.

An `IdGenerator` samples one word per configured list, joins them and keeps
retrying until a candidate passes the length limit, the duplicate history and
an optional caller validator, or until `max_attempts` is spent.

Generation is safe to call from several threads or tasks on one instance. The
random source and the duplicate history each sit behind their own lock; the
rest of an attempt, including the caller's validator, runs unlocked.
"""

from __future__ import annotations

import inspect
import random
import threading
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Union

import anyio

from .config import GeneratorConfig
from .errors import ConfigurationError, RetryExhaustedError
from .history import DuplicateTracker
from .telemetry.base import NullTelemetrySink, TelemetrySink
from .wordlists import ResourceWordListProvider, WordList, WordListProvider

Validator = Callable[[str], bool]
AsyncValidator = Callable[[str], Union[Awaitable[bool], bool]]


class IdGenerator:
    """Stateful generator; configure it fluently, then call `generate`."""

    def __init__(
        self,
        lists: Sequence[WordList],
        *,
        provider: Optional[WordListProvider] = None,
        telemetry: Optional[TelemetrySink] = None,
    ) -> None:
        if not lists:
            raise ConfigurationError("At least one word list must be specified")
        self._config = GeneratorConfig(lists=tuple(lists))
        self._provider: WordListProvider = provider or ResourceWordListProvider()
        self._telemetry: TelemetrySink = telemetry or NullTelemetrySink()
        self._rng = random.Random()
        self._rng_lock = threading.Lock()
        self._history = DuplicateTracker()

    @classmethod
    def from_config(
        cls,
        config: GeneratorConfig,
        *,
        provider: Optional[WordListProvider] = None,
        telemetry: Optional[TelemetrySink] = None,
    ) -> "IdGenerator":
        generator = cls(config.lists, provider=provider, telemetry=telemetry)
        if config.seed is not None:
            generator.with_seed(config.seed)
        if config.allow_duplicates:
            generator.allow_duplicates()
        generator._config = config
        return generator

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    @property
    def history(self) -> DuplicateTracker:
        return self._history

    # Fluent configuration. Each call swaps in a new frozen config.

    def with_joiner(self, joiner: str) -> "IdGenerator":
        self._config = self._config.with_joiner(joiner)
        return self

    def with_max_length(self, max_length: int) -> "IdGenerator":
        """Candidates must be strictly shorter than `max_length`; checked when generating."""
        self._config = self._config.with_max_length(max_length)
        return self

    def with_max_attempts(self, max_attempts: int) -> "IdGenerator":
        self._config = self._config.with_max_attempts(max_attempts)
        return self

    def with_seed(self, seed: int) -> "IdGenerator":
        """Make sampling deterministic. Safe while other threads are generating."""
        with self._rng_lock:
            self._rng = random.Random(seed)
            self._config = self._config.with_seed(seed)
        return self

    def allow_duplicates(self) -> "IdGenerator":
        self._history.disable()
        self._config = self._config.allowing_duplicates()
        return self

    # Generation

    def generate(self, validate: Optional[Validator] = None) -> str:
        """Return a new id, optionally vetted by `validate`.

        Raises ConfigurationError if max_length cannot fit the configured lists
        and RetryExhaustedError if no candidate survives `max_attempts` tries.
        """

        config, words = self._prepare()
        for attempt in range(1, config.max_attempts + 1):
            candidate = self._assemble(config, words)
            if not self._passes_builtin_checks(config, candidate, attempt):
                continue
            if validate is not None:
                verdict = validate(candidate)
                if inspect.isawaitable(verdict):
                    if inspect.iscoroutine(verdict):
                        verdict.close()
                    raise TypeError("validator returned an awaitable; use generate_async instead")
                if not verdict:
                    self._reject("validator", candidate, attempt)
                    continue
            return self._accept(candidate, attempt)
        raise self._exhausted(config, validated=validate is not None)

    async def generate_async(self, validate: AsyncValidator) -> str:
        """Like `generate`, awaiting `validate` for every surviving candidate.

        No generator lock is held while the validator is awaited, so other
        callers keep generating in the meantime. Word lists are loaded in a
        worker thread; the first call reads the bundled resources from disk.
        """

        config, words = await anyio.to_thread.run_sync(self._prepare)
        for attempt in range(1, config.max_attempts + 1):
            candidate = self._assemble(config, words)
            if not self._passes_builtin_checks(config, candidate, attempt):
                continue
            verdict = validate(candidate)
            if inspect.isawaitable(verdict):
                verdict = await verdict
            if not verdict:
                self._reject("validator", candidate, attempt)
                continue
            return self._accept(candidate, attempt)
        raise self._exhausted(config, validated=True)

    def generate_many(self, count: int, validate: Optional[Validator] = None) -> List[str]:
        return [self.generate(validate) for _ in range(count)]

    def _prepare(self) -> tuple[GeneratorConfig, List[Sequence[str]]]:
        config = self._config
        config.check_length_budget()
        words = [self._provider.load(identifier) for identifier in config.lists]
        for identifier, candidates in zip(config.lists, words):
            if not candidates:
                raise ConfigurationError(f"Word list '{identifier.value}' is empty")
        return config, words

    def _sample(self, candidates: Sequence[str]) -> str:
        with self._rng_lock:
            return candidates[self._rng.randrange(len(candidates))]

    def _assemble(self, config: GeneratorConfig, words: List[Sequence[str]]) -> str:
        return config.joiner.join(self._sample(candidates) for candidates in words)

    def _passes_builtin_checks(self, config: GeneratorConfig, candidate: str, attempt: int) -> bool:
        if not config.accepts_length(candidate):
            self._reject("length", candidate, attempt)
            return False
        if self._history.check_and_record(candidate):
            self._reject("duplicate", candidate, attempt)
            return False
        return True

    def _reject(self, reason: str, candidate: str, attempt: int) -> None:
        self._telemetry.emit("id.rejected", {"reason": reason, "candidate": candidate, "attempt": attempt})

    def _accept(self, candidate: str, attempt: int) -> str:
        self._telemetry.emit("id.generated", {"value": candidate, "attempts": attempt})
        return candidate

    def _exhausted(self, config: GeneratorConfig, *, validated: bool) -> RetryExhaustedError:
        self._telemetry.emit("id.exhausted", {"attempts": config.max_attempts, "validated": validated})
        return RetryExhaustedError(config.max_attempts, validated=validated)

    def __repr__(self) -> str:
        lists = ", ".join(identifier.value for identifier in self._config.lists)
        return f"IdGenerator([{lists}], joiner={self._config.joiner!r})"


def create(*lists: WordList, **kwargs: Any) -> IdGenerator:
    return IdGenerator(lists, **kwargs)


def descriptive_animal(**kwargs: Any) -> IdGenerator:
    """[Adjective][Animal], e.g. "BravePenguin"."""
    return IdGenerator((WordList.ADJECTIVES, WordList.ANIMALS), **kwargs)


def colourful_animal(**kwargs: Any) -> IdGenerator:
    """[Colour][Animal], e.g. "BlueDuck"."""
    return IdGenerator((WordList.COLOURS, WordList.ANIMALS), **kwargs)


def descriptive_colourful_animal(**kwargs: Any) -> IdGenerator:
    """[Adjective][Colour][Animal], e.g. "ExpressiveGreenEmu"."""
    return IdGenerator((WordList.ADJECTIVES, WordList.COLOURS, WordList.ANIMALS), **kwargs)


__all__ = [
    "AsyncValidator",
    "IdGenerator",
    "Validator",
    "colourful_animal",
    "create",
    "descriptive_animal",
    "descriptive_colourful_animal",
]
