"""Infrastructure adapters."""

from azfailaway.infrastructure.adapters.logging_adapter import LoggingAdapter

__all__: list[str] = ["LoggingAdapter"]
