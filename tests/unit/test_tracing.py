"""traced decorator: wraps sync and async callables and re-raises."""

import pytest

from site_content.shared.telemetry.tracing import traced


@traced("test.async_ok")
async def _async_double(value: int) -> int:
    return value * 2


@traced()
def _sync_fail(slug: str) -> None:
    raise ValueError(slug)


async def test_async_function_result_is_returned() -> None:
    assert await _async_double(21) == 42


def test_sync_function_error_is_reraised() -> None:
    with pytest.raises(ValueError, match="blog"):
        _sync_fail(slug="blog")


def test_wrapped_name_is_preserved() -> None:
    assert _async_double.__name__ == "_async_double"
