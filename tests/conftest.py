import anyio
import pytest


@pytest.fixture(
    params=[
        pytest.param(("asyncio", {"use_uvloop": False}), id="asyncio"),
        pytest.param(
            ("trio", {"restrict_keyboard_interrupt_to_checkpoints": True}), id="trio"
        ),
    ],
    scope="session",
)
def anyio_backend(request):
    return request.param


class ConcurrencyTracker:
    def __init__(self) -> None:
        self.current = 0
        self.peak = 0
        self.started: list[str] = []

    def sleeper(self, key: str, value=None, delay: float = 0.05, fail: bool = False):
        async def _task(outcomes):
            self.started.append(key)
            self.current += 1
            self.peak = max(self.peak, self.current)
            try:
                await anyio.sleep(delay)
            finally:
                self.current -= 1

            if fail:
                raise ValueError(value)

            return value

        return _task


@pytest.fixture
def tracker():
    return ConcurrencyTracker()
