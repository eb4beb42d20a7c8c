"""CMS content client with timeout-bounded fetches and empty fallbacks."""

import asyncio
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from resilient_cms.config import BackendConfig, get_backend_config
from resilient_cms.config.constants import COMPONENT_FETCH
from resilient_cms.content import (
    CollectionResult,
    Homepage,
    MenuItem,
    SingletonResult,
    SingletonStatus,
)
from resilient_cms.content.results import CollectionEnvelope, SingletonEnvelope
from resilient_cms.fetch.classify import classify_exception, classify_status
from resilient_cms.fetch.constants import (
    API_PATH_PREFIX,
    COLLECTION_POPULATE_PARAMS,
    DEFAULT_HEADERS,
    SINGLE_POPULATE_PARAMS,
)
from resilient_cms.fetch.http import client_scope
from resilient_cms.fetch.models import ContentOutcome, FetchError, FetchErrorKind
from resilient_cms.observability.logging import get_logger
from resilient_cms.observability.metrics import CmsMetrics
from resilient_cms.observability.redact import redact_headers, redact_url_credentials


T = TypeVar("T", bound=BaseModel)


class CmsClient:
    """Client for collection and single-type CMS endpoints.

    Every public ``fetch_*`` method returns a well-formed result: an empty
    collection or a null document when the backend is unconfigured,
    unreachable, slow, or returns garbage. The ``*_outcome`` variants expose
    the underlying success-or-error outcome for callers that need it.
    """

    def __init__(
        self,
        config: BackendConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Backend configuration; the process-wide one if omitted.
            http_client: Shared async client; a short-lived client is opened
                per request if omitted.
        """
        self._config = config if config is not None else get_backend_config()
        self._http_client = http_client
        self._metrics = CmsMetrics.get_instance()
        self._log = get_logger(COMPONENT_FETCH)

    @property
    def config(self) -> BackendConfig:
        """Configuration this client was built with."""
        return self._config

    def build_url(self, endpoint: str) -> str:
        """Build the absolute URL of an endpoint.

        Args:
            endpoint: Endpoint name such as ``menu-items``.

        Returns:
            Absolute endpoint URL without query string.

        Raises:
            ValueError: If the backend is not configured.
        """
        if self._config.base_url is None:
            msg = "Backend base URL is not configured"
            raise ValueError(msg)
        return f"{self._config.base_url}{API_PATH_PREFIX}/{endpoint.strip('/')}"

    def build_headers(self) -> dict[str, str]:
        """Build request headers, with the bearer token when one is set."""
        headers = dict(DEFAULT_HEADERS)
        if self._config.api_token:
            headers["Authorization"] = f"Bearer {self._config.api_token}"
        return headers

    async def fetch_collection(
        self,
        endpoint: str,
        entity_model: type[T] = MenuItem,  # type: ignore[assignment]
    ) -> CollectionResult[T]:
        """Fetch a collection, falling back to an empty result.

        Args:
            endpoint: Collection endpoint name.
            entity_model: Schema each entity is validated against.

        Returns:
            The fetched collection, or an empty one on any failure.
        """
        try:
            outcome = await self.fetch_collection_outcome(endpoint, entity_model)
        except Exception as e:  # noqa: BLE001
            outcome = ContentOutcome.fail(classify_exception(e, endpoint))

        if outcome.is_success and outcome.value is not None:
            self._log.debug(
                "cms_fetch_complete",
                endpoint=endpoint,
                items=len(outcome.value.items),
            )
            return outcome.value

        self._report_fallback(endpoint, outcome.error)
        return CollectionResult[entity_model].empty()  # type: ignore[valid-type]

    async def fetch_collection_outcome(
        self,
        endpoint: str,
        entity_model: type[T] = MenuItem,  # type: ignore[assignment]
    ) -> ContentOutcome[CollectionResult[T]]:
        """Fetch a collection and report success or the classified error.

        Args:
            endpoint: Collection endpoint name.
            entity_model: Schema each entity is validated against.

        Returns:
            Outcome holding the collection or the error.
        """
        if not self._config.is_configured:
            return ContentOutcome.fail(_unconfigured_error(endpoint))

        raw = await self._get_json(endpoint, COLLECTION_POPULATE_PARAMS)
        if raw.error is not None:
            return ContentOutcome.fail(raw.error)

        try:
            envelope = CollectionEnvelope[entity_model].model_validate(raw.value)  # type: ignore[valid-type]
        except ValidationError as e:
            return ContentOutcome.fail(classify_exception(e, endpoint))

        result_type = CollectionResult[entity_model]  # type: ignore[valid-type]
        return ContentOutcome.ok(result_type.from_envelope(envelope))

    async def fetch_single(
        self,
        endpoint: str,
        document_model: type[T] = Homepage,  # type: ignore[assignment]
    ) -> SingletonResult[T]:
        """Fetch a single-type document, falling back to a null value.

        Args:
            endpoint: Single-type endpoint name such as ``homepage``.
            document_model: Schema the document is validated against.

        Returns:
            The document result; ``status`` tells why ``value`` may be None.
        """
        try:
            outcome = await self.fetch_single_outcome(endpoint, document_model)
        except Exception as e:  # noqa: BLE001
            outcome = ContentOutcome.fail(classify_exception(e, endpoint))

        if outcome.is_success and outcome.value is not None:
            self._log.debug(
                "cms_fetch_complete",
                endpoint=endpoint,
                status=outcome.value.status.value,
            )
            return outcome.value

        self._report_fallback(endpoint, outcome.error)
        status = (
            SingletonStatus.UNCONFIGURED
            if outcome.error is not None
            and outcome.error.kind is FetchErrorKind.UNCONFIGURED
            else SingletonStatus.FAILED
        )
        return SingletonResult[document_model].unavailable(status)  # type: ignore[valid-type]

    async def fetch_single_outcome(
        self,
        endpoint: str,
        document_model: type[T] = Homepage,  # type: ignore[assignment]
    ) -> ContentOutcome[SingletonResult[T]]:
        """Fetch a single-type document and report success or the error.

        Args:
            endpoint: Single-type endpoint name.
            document_model: Schema the document is validated against.

        Returns:
            Outcome holding the result (FOUND or EMPTY) or the error.
        """
        if not self._config.is_configured:
            return ContentOutcome.fail(_unconfigured_error(endpoint))

        raw = await self._get_json(endpoint, SINGLE_POPULATE_PARAMS)
        if raw.error is not None:
            return ContentOutcome.fail(raw.error)

        try:
            envelope = SingletonEnvelope[document_model].model_validate(raw.value)  # type: ignore[valid-type]
        except ValidationError as e:
            return ContentOutcome.fail(classify_exception(e, endpoint))

        result_type = SingletonResult[document_model]  # type: ignore[valid-type]
        return ContentOutcome.ok(result_type.from_envelope(envelope))

    async def _get_json(
        self,
        endpoint: str,
        params: tuple[tuple[str, str], ...],
    ) -> ContentOutcome[Any]:
        """Issue one GET under the request deadline and decode the JSON body.

        Args:
            endpoint: Endpoint name.
            params: Expansion query parameters.

        Returns:
            Outcome holding the decoded JSON or the classified error.
        """
        url = self.build_url(endpoint)
        headers = self.build_headers()
        timeout = self._config.request_timeout_seconds
        log = self._log.bind(endpoint=endpoint, url=redact_url_credentials(url))
        log.debug("cms_request", headers=redact_headers(headers), timeout=timeout)

        try:
            # The deadline covers connect, response and body read together
            async with asyncio.timeout(timeout):
                async with client_scope(self._http_client, timeout) as client:
                    response = await client.get(
                        url, params=params, headers=headers, timeout=timeout
                    )
        except Exception as e:  # noqa: BLE001
            return ContentOutcome.fail(classify_exception(e, endpoint))

        self._metrics.record_request(response.status_code)
        error = classify_status(response.status_code, endpoint, response.reason_phrase)
        if error is not None:
            return ContentOutcome.fail(error)

        try:
            payload = response.json()
        except ValueError as e:
            return ContentOutcome.fail(classify_exception(e, endpoint))
        return ContentOutcome.ok(payload)

    def _report_fallback(self, endpoint: str, error: FetchError | None) -> None:
        """Log and count a fallback.

        Verbose mode logs the full error; otherwise a single terse line.
        """
        if error is None:
            error = FetchError(
                kind=FetchErrorKind.UNKNOWN,
                message=f"No content returned for {endpoint}",
            )
        self._metrics.record_fallback(error.kind.value)
        log = self._log.bind(endpoint=endpoint, error_kind=error.kind.value)

        if error.kind is FetchErrorKind.UNCONFIGURED:
            if self._config.verbose:
                log.debug("cms_not_configured_empty_result", message=error.message)
            return

        if self._config.verbose:
            log.error(
                "cms_fetch_failed",
                status_code=error.status_code,
                message=error.message,
                detail=error.detail,
            )
            log.info(
                "cms_fallback_content",
                message="Returning empty data - pages will use fallback content",
            )
        else:
            log.info(
                "cms_fallback_content",
                message=error.message,
                reason="cms_unavailable",
            )


def _unconfigured_error(endpoint: str) -> FetchError:
    return FetchError(
        kind=FetchErrorKind.UNCONFIGURED,
        message=f"CMS not configured - returning empty data for {endpoint}",
    )
