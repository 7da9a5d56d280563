"""HTTP render backend adapter."""

import logging

import httpx

from hookclip.errors import RenderBackendError
from hookclip.jobs.models import ClipOptions
from hookclip.models.moment import Moment

logger = logging.getLogger(__name__)


class HttpRenderBackend:
    """Client for a network render service.

    The service is expected to accept ``POST {base_url}/render`` and to
    report progress by posting ``RenderEvent`` payloads to ``callback_url``.
    """

    def __init__(
        self,
        base_url: str,
        callback_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.callback_url = callback_url
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "http"

    async def start(self, job_id: str, moment: Moment, options: ClipOptions) -> None:
        payload = {
            "job_id": job_id,
            "label": moment.label,
            "start": moment.start,
            "end": moment.end,
            "aspect_ratio": options.aspect_ratio.value,
            "resolution": options.resolution.value,
            "callback_url": self.callback_url,
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(f"{self.base_url}/render", json=payload)
            except httpx.RequestError as e:
                raise RenderBackendError(f"Failed to reach render backend: {e}") from e

        if response.status_code not in (200, 201, 202):
            raise RenderBackendError(
                f"Render backend returned error: {response.text}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError:
            body = {}
        if isinstance(body, dict) and body.get("accepted") is False:
            raise RenderBackendError(
                f"Render backend rejected job {job_id}: {body.get('detail', 'no detail')}",
                status_code=response.status_code,
            )
        logger.info("Render backend accepted job %s", job_id)
