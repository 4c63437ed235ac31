"""
AWS API call logging using botocore event hooks.

Every client created through ``AWSClient`` gets hooks that log the service,
operation, duration and outcome of each call. Hook failures are logged and
never interfere with the API call itself.
"""

import re
import time
from dataclasses import dataclass
from typing import Any

from botocore.exceptions import ClientError

from azfailaway.domain.ports.logging_port import LoggingPort

CONTEXT_KEY = "azfailaway_call"


@dataclass
class RequestContext:
    """Context information for tracking one AWS API request."""

    service: str
    operation: str
    start_time: float
    retry_count: int = 0


class BotocoreLoggingHandler:
    """Logs AWS API calls made by instrumented boto3 clients."""

    def __init__(self, logger: LoggingPort) -> None:
        self.logger = logger
        self._event_pattern = re.compile(r"(before|after)-call(?:-error)?\.([^.]+)\.([^.]+)")
        self._event_cache: dict[str, tuple[str, str]] = {}
        self._throttling_errors = {
            "Throttling",
            "ThrottlingException",
            "RequestLimitExceeded",
            "TooManyRequestsException",
            "ProvisionedThroughputExceededException",
        }

    def register_client_events(self, client: Any) -> Any:
        """Register handlers on a boto3 client emitter and return the client."""
        events = client.meta.events
        events.register("before-call", self._before_call)
        events.register("after-call", self._after_call_success)
        events.register("after-call-error", self._after_call_error)
        events.register("needs-retry", self._on_retry_needed)
        return client

    def _before_call(self, event_name: str, **kwargs: Any) -> None:
        try:
            service, operation = self._parse_event_name(event_name)
            request_context = kwargs.get("context")
            if isinstance(request_context, dict):
                request_context[CONTEXT_KEY] = RequestContext(
                    service=service, operation=operation, start_time=time.perf_counter()
                )
        except Exception as e:
            self.logger.warning("Error in before_call handler: %s", e)

    def _after_call_success(self, event_name: str, **kwargs: Any) -> None:
        try:
            context = self._get_context(kwargs)
            if context is None:
                return

            duration_ms = (time.perf_counter() - context.start_time) * 1000
            http_response = kwargs.get("http_response")
            status_code = getattr(http_response, "status_code", 200)
            self.logger.debug(
                "AWS %s.%s -> HTTP %s in %.1fms (retries=%d)",
                context.service,
                context.operation,
                status_code,
                duration_ms,
                context.retry_count,
            )
        except Exception as e:
            self.logger.warning("Error in after_call_success handler: %s", e)

    def _after_call_error(self, event_name: str, **kwargs: Any) -> None:
        try:
            context = self._get_context(kwargs)
            if context is None:
                return

            duration_ms = (time.perf_counter() - context.start_time) * 1000
            error_code, error_type = self._parse_error(kwargs.get("exception"))
            if self._is_throttling_error(error_code):
                self.logger.warning(
                    "AWS %s.%s throttled (%s) after %.1fms",
                    context.service,
                    context.operation,
                    error_code,
                    duration_ms,
                )
            else:
                self.logger.warning(
                    "AWS %s.%s failed with %s/%s after %.1fms",
                    context.service,
                    context.operation,
                    error_type,
                    error_code,
                    duration_ms,
                )
        except Exception as e:
            self.logger.warning("Error in after_call_error handler: %s", e)

    def _on_retry_needed(self, event_name: str, **kwargs: Any) -> None:
        try:
            request_dict = kwargs.get("request_dict") or {}
            request_context = request_dict.get("context") if isinstance(request_dict, dict) else {}
            if isinstance(request_context, dict):
                context = request_context.get(CONTEXT_KEY)
                if context is not None:
                    context.retry_count += 1
        except Exception as e:
            self.logger.warning("Error in retry_needed handler: %s", e)

    def _get_context(self, kwargs: dict[str, Any]) -> Any:
        request_context = kwargs.get("context")
        if isinstance(request_context, dict):
            return request_context.get(CONTEXT_KEY)
        return None

    def _parse_event_name(self, event_name: str) -> tuple[str, str]:
        """Parse botocore event name to extract service and operation."""
        if event_name in self._event_cache:
            return self._event_cache[event_name]

        match = self._event_pattern.match(event_name)
        if match:
            service, operation = match.groups()[1:3]
        else:
            parts = event_name.split(".")
            if len(parts) < 3:
                return "unknown", "unknown"
            service, operation = parts[1], parts[2]

        self._event_cache[event_name] = (service, operation)
        return service, operation

    def _parse_error(self, exception: Any) -> tuple[str, str]:
        if isinstance(exception, ClientError):
            return exception.response.get("Error", {}).get("Code", "Unknown"), "ClientError"
        if exception is None:
            return "Unknown", "Unknown"
        return "Unknown", type(exception).__name__

    def _is_throttling_error(self, error_code: str) -> bool:
        return error_code in self._throttling_errors
