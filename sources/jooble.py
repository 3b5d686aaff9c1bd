import logging
from typing import Optional

import requests

import config as config
from errors import FetchError
from models import Page
from sources.base import PageSource

logger = logging.getLogger(__name__)


class JoobleSource(PageSource):
    name = "jooble"

    def __init__(self, api_key: Optional[str] = None, api_url: Optional[str] = None):
        self.api_key = api_key if api_key is not None else config.JOOBLE_API_KEY
        self.api_url = (api_url or config.JOOBLE_API_URL).rstrip("/")

    @property
    def endpoint(self) -> str:
        return f"{self.api_url}/{self.api_key}"

    def fetch_page(
        self,
        keywords: str,
        location: str,
        min_salary: Optional[int],
        page: int,
        page_size: int,
    ) -> Page:
        if not self.api_key:
            raise FetchError("Jooble API key is not configured")

        body = {
            "keywords": keywords or "",
            "location": location or "",
            "page": str(page),
            "ResultOnPage": page_size,
        }
        if min_salary is not None:
            body["salary"] = min_salary

        try:
            resp = requests.post(
                self.endpoint,
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=config.REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise FetchError(f"Jooble request failed: {e}") from e

        if not resp.ok:
            raise FetchError(
                f"Jooble returned HTTP {resp.status_code}",
                body=self._error_body(resp),
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise FetchError("Jooble returned an invalid JSON body") from e

        if not isinstance(data, dict):
            raise FetchError("Jooble returned an unexpected response shape")
        return Page.from_response(data)

    def _error_body(self, resp: requests.Response) -> Optional[dict]:
        try:
            data = resp.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None
