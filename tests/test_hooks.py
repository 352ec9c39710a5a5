"""Tests for canopy._internal.hooks — sync and async hook calls."""

import pytest

from canopy._internal.hooks import call_hook


class TestCallHook:
    @pytest.mark.anyio
    async def test_sync_hook(self) -> None:
        assert await call_hook(lambda a, b: a + b, 1, 2) == 3

    @pytest.mark.anyio
    async def test_async_hook(self) -> None:
        async def hook(state: str, context: str) -> str:
            return f"{state}:{context}"

        assert await call_hook(hook, "s", "c") == "s:c"

    @pytest.mark.anyio
    async def test_none_result(self) -> None:
        assert await call_hook(lambda: None) is None

    @pytest.mark.anyio
    async def test_errors_propagate(self) -> None:
        def hook() -> None:
            msg = "boom"
            raise RuntimeError(msg)

        with pytest.raises(RuntimeError, match="boom"):
            await call_hook(hook)
