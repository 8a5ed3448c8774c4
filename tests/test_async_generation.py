from __future__ import annotations

import threading

import anyio
import pytest

from memorable_ids import RetryExhaustedError, WordList, create, descriptive_colourful_animal
from memorable_ids.wordlists import StaticWordListProvider


@pytest.mark.anyio("asyncio")
async def test_async_validator_picks_the_value(tiny_provider: StaticWordListProvider) -> None:
    async def only_square(candidate: str) -> bool:
        await anyio.sleep(0)
        return candidate == "Square"

    generator = create(WordList.SHAPES, provider=tiny_provider).with_max_attempts(200)
    assert await generator.generate_async(only_square) == "Square"


@pytest.mark.anyio("asyncio")
async def test_async_entry_point_accepts_plain_bool_validators(tiny_provider: StaticWordListProvider) -> None:
    generator = create(WordList.SHAPES, provider=tiny_provider).with_max_attempts(200)
    assert await generator.generate_async(lambda candidate: candidate == "Circle") == "Circle"


@pytest.mark.anyio("asyncio")
async def test_async_exhaustion_mentions_the_validator(tiny_provider: StaticWordListProvider) -> None:
    async def never(candidate: str) -> bool:
        return False

    generator = create(WordList.SHAPES, provider=tiny_provider).with_max_attempts(20)
    with pytest.raises(RetryExhaustedError) as excinfo:
        await generator.generate_async(never)
    assert excinfo.value.validated is True


@pytest.mark.anyio("asyncio")
async def test_async_and_sync_paths_share_the_seeded_sequence() -> None:
    sync_values = [descriptive_colourful_animal().with_seed(21).generate(lambda _: True)]

    async def accept(candidate: str) -> bool:
        return True

    async_values = [await descriptive_colourful_animal().with_seed(21).generate_async(accept)]
    assert sync_values == async_values


@pytest.mark.anyio("asyncio")
async def test_suspended_validator_does_not_block_other_callers() -> None:
    generator = descriptive_colourful_animal().with_seed(8)
    released = anyio.Event()
    results: dict[str, str] = {}

    async def waits_for_release(candidate: str) -> bool:
        await released.wait()
        return True

    async def immediate(candidate: str) -> bool:
        return True

    async def slow_caller() -> None:
        results["slow"] = await generator.generate_async(waits_for_release)

    async def fast_caller() -> None:
        results["fast"] = await generator.generate_async(immediate)
        released.set()

    with anyio.fail_after(5):
        async with anyio.create_task_group() as tg:
            tg.start_soon(slow_caller)
            tg.start_soon(fast_caller)

    assert set(results) == {"slow", "fast"}
    assert results["slow"] != results["fast"]


class ThreadRecordingProvider(StaticWordListProvider):
    def __init__(self, mapping) -> None:
        super().__init__(mapping)
        self.threads: list[int] = []

    def load(self, identifier: WordList):
        self.threads.append(threading.get_ident())
        return super().load(identifier)


@pytest.mark.anyio("asyncio")
async def test_async_path_loads_words_off_the_event_loop() -> None:
    provider = ThreadRecordingProvider({WordList.SHAPES: ("Circle", "Square", "Star")})
    generator = create(WordList.SHAPES, provider=provider)
    assert await generator.generate_async(lambda candidate: True) in ("Circle", "Square", "Star")
    assert provider.threads
    assert threading.get_ident() not in provider.threads
