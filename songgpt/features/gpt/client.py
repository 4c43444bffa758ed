"""Outbound client for the GPT REST API.

One ``requests.Session`` is created on first use and reused for every request
until the application shuts down. There is no retry: a transport error or a
non-2xx status is raised as ``GptApiError``.
"""

import logging
from typing import Any, Optional

import requests

from songgpt.core import config
from songgpt.core.exceptions import GptApiError

logger = logging.getLogger(__name__)

MEDIA_TYPE = "application/json"
AUTHORIZATION = "Authorization"
BEARER = "Bearer "


class GptClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        url: str,
        model_info_url: str,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.model = model
        self.url = url
        self.model_info_url = model_info_url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({AUTHORIZATION: BEARER + api_key})

    def _send(self, method: str, url: str, **kwargs: Any) -> dict:
        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            logger.error(
                "GPT API returned error status",
                extra={"url": url, "status_code": e.response.status_code if e.response is not None else None},
            )
            raise GptApiError() from e
        except ValueError as e:
            # requests.JSONDecodeError 포함
            logger.error("GPT API returned non-JSON body", extra={"url": url})
            raise GptApiError() from e
        except requests.RequestException as e:
            logger.error("GPT API request failed", extra={"url": url, "reason": str(e)})
            raise GptApiError() from e

    def chat_completion(self, payload: dict) -> dict:
        return self._send("POST", self.url, json=payload, headers={"Content-Type": MEDIA_TYPE})

    def model_info(self) -> dict:
        return self._send("GET", self.model_info_url + self.model)

    def close(self) -> None:
        self._session.close()


_client: Optional[GptClient] = None


def get_gpt_client() -> GptClient:
    global _client
    if _client is None:
        _client = GptClient(
            api_key=config.GPT_API_KEY,
            model=config.GPT_MODEL,
            url=config.GPT_URL,
            model_info_url=config.GPT_MODEL_INFO_URL,
            timeout=config.GPT_TIMEOUT_SECONDS,
        )
    return _client


def close_gpt_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
