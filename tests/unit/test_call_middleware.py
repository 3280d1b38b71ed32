import pytest

from brigade.app.invoke import call_middleware
from brigade.app.middleware import compose
from brigade.core.errors import InvalidBrigadeError, NotAwaitableError, UnexpectedResultError


@pytest.mark.asyncio
async def test_call_middleware_resolves_to_the_sentinel_response() -> None:
    async def forward(request, advance, shortcut):
        return await advance()

    expected: dict[str, object] = {}
    result = await call_middleware(compose([forward]), {}, expected)
    assert result is expected


@pytest.mark.asyncio
async def test_call_middleware_accepts_a_single_middleware() -> None:
    async def gate(request, advance, shortcut):
        return await shortcut()

    expected = {"status": 204}
    assert await call_middleware(gate, {}, expected) is expected


@pytest.mark.asyncio
async def test_call_middleware_surfaces_middleware_failure() -> None:
    async def failing(request, advance, shortcut):
        raise RuntimeError("hello")

    with pytest.raises(RuntimeError, match="^hello$"):
        await call_middleware(compose([failing]), {}, {})


@pytest.mark.asyncio
async def test_call_middleware_detects_missing_continuation_call() -> None:
    async def silent(request, advance, shortcut):
        return None

    with pytest.raises(UnexpectedResultError, match="terminated with an unexpected response") as exc_info:
        await call_middleware(compose([silent]), {}, {})
    assert exc_info.value.result is None


@pytest.mark.asyncio
@pytest.mark.filterwarnings("ignore:coroutine .* was never awaited:RuntimeWarning")
async def test_call_middleware_detects_a_broken_chain() -> None:
    async def drops_result(request, advance, shortcut):
        advance()

    async def forward(request, advance, shortcut):
        return await advance()

    with pytest.raises(UnexpectedResultError, match="terminated with an unexpected response"):
        await call_middleware(compose([drops_result, forward]), {}, {})


@pytest.mark.asyncio
async def test_call_middleware_rejects_equal_but_distinct_result() -> None:
    async def rebuild(request, advance, shortcut):
        result = await advance()
        return dict(result)

    with pytest.raises(UnexpectedResultError):
        await call_middleware(compose([rebuild]), {}, {"a": 1})


@pytest.mark.asyncio
async def test_call_middleware_without_response_requires_a_value() -> None:
    async def forward(request, advance, shortcut):
        return await advance()

    with pytest.raises(UnexpectedResultError, match="cannot be None"):
        await call_middleware(compose([forward]), {})


@pytest.mark.asyncio
async def test_call_middleware_without_response_returns_produced_value() -> None:
    async def produce(request, advance, shortcut):
        await advance()
        return {"body": "ok"}

    assert await call_middleware(compose([produce]), {}) == {"body": "ok"}


@pytest.mark.asyncio
async def test_call_middleware_reports_non_awaitable_middleware() -> None:
    def plain(request, advance, shortcut):
        return 0

    with pytest.raises(NotAwaitableError, match="'plain'"):
        await call_middleware(plain, {}, {})


def test_call_middleware_validates_arguments_synchronously() -> None:
    async def forward(request, advance, shortcut):
        return await advance()

    with pytest.raises(InvalidBrigadeError, match="middleware must be callable"):
        call_middleware(None, {}, {})  # type: ignore[arg-type]
    with pytest.raises(InvalidBrigadeError, match="request must not be None"):
        call_middleware(forward, None, {})
    with pytest.raises(InvalidBrigadeError, match="response must not be None"):
        call_middleware(forward, {}, None)
