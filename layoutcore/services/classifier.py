"""HTTP adapter for the external classification service."""

from __future__ import annotations

import httpx
from loguru import logger
from pydantic import ValidationError

from layoutcore.config import Settings, get_settings
from layoutcore.exceptions import ClassificationError, ConfigurationError
from layoutcore.models import ValidationOutcome


class HttpClassifier:
    """Asks the classification service whether two shapes may share a door.

    Posts `{"sourceId", "targetId"}` and expects a JSON validation outcome
    (`canConnect`, `allowedFlowTypes`, `status`, `message`, `details`).
    """

    def __init__(
        self,
        base_url: str,
        path: str = "/validation/door-connection",
        timeout: float | None = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.path = path
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> HttpClassifier:
        settings = settings or get_settings()
        if not settings.classifier_url:
            raise ConfigurationError(
                "Classification service URL is not configured",
                {"env": "LAYOUTCORE_CLASSIFIER_URL"},
            )
        return cls(
            settings.classifier_url,
            path=settings.classifier_path,
            timeout=settings.classifier_timeout,
        )

    async def classify(self, first_shape_id: str, second_shape_id: str) -> ValidationOutcome:
        payload = {"sourceId": first_shape_id, "targetId": second_shape_id}
        try:
            response = await self._client.post(self.path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ClassificationError(
                "Classification service rejected the request",
                {"status_code": str(exc.response.status_code)},
            ) from exc
        except httpx.HTTPError as exc:
            raise ClassificationError(
                "Classification service unreachable",
                {"error": str(exc) or type(exc).__name__},
            ) from exc

        try:
            outcome = ValidationOutcome.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ClassificationError(
                "Classification service returned an invalid answer",
                {"error": str(exc)},
            ) from exc

        logger.debug("Classified {} <-> {}: {}", first_shape_id, second_shape_id, outcome.status.value)
        return outcome

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpClassifier:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
