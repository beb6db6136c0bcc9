from abc import abstractmethod
from typing import Any

import httpx

from search_framework.clients.ClientInterface import ClientInterface
from search_framework.helper.HelperConfig import HelperConfig


class HttpClientInterface(ClientInterface):
    """Backend reached over HTTP.

    boot() opens one connection pool for the backend's base URL with the auth
    header preset; close() releases it. Requests before boot() fail.

    Settings:
        <TYPE>_TIMEOUT:  Request timeout in seconds for all backends of the type, default 30.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self.timeout = helper_config.get_number_val(f"{self.get_client_type()}_TIMEOUT", default=30.0)
        self._client: httpx.Client | None = None

    ##########################################
    ############### CONNECTION ###############
    ##########################################

    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the root URL of the backend, e.g. "http://localhost:8983/solr".
        """
        pass

    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the headers authenticating every request, empty if the backend is open.
        """
        pass

    @abstractmethod
    def _get_endpoint_healthcheck(self) -> str:
        """
        Returns the path answering liveness checks, e.g. "/admin/ping".
        """
        pass

    def _get_transport(self) -> httpx.BaseTransport | None:
        """
        Returns the transport requests are sent through, None for the network.
        """
        return None

    def boot(self) -> None:
        self._client = httpx.Client(
            base_url=self._get_base_url().rstrip("/"),
            headers=self._get_auth_header(),
            timeout=self.timeout,
            transport=self._get_transport(),
        )
        self.logging.debug("HTTP client for %s engine '%s' booted", self.get_client_type(), self.get_engine_name())

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    ##########################################
    ################ REQUESTS ################
    ##########################################

    def do_healthcheck(self) -> httpx.Response:
        return self.do_request("GET", self._get_endpoint_healthcheck(), raise_on_error=True)

    def do_request(
        self,
        method: str,
        endpoint: str = "",
        json: Any = None,
        params: dict | None = None,
        content: bytes | str | None = None,
        headers: dict | None = None,
        raise_on_error: bool = False,
    ) -> httpx.Response:
        """Sends a request to a path below the base URL.

        At most one of json and content is sent as body.

        Raises:
            RuntimeError: If boot() was not called.
            httpx.HTTPStatusError: On a 3xx-5xx answer when raise_on_error is set.
            httpx.TransportError: If the backend cannot be reached.
        """
        if self._client is None:
            raise RuntimeError(f"HTTP client of {self.get_client_type()} engine '{self.get_engine_name()}' is not booted, call boot() first.")

        path = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""
        body: dict = {"content": content} if content is not None else {"json": json} if json is not None else {}

        response = self._client.request(method, path, params=params, headers=headers, **body)

        if raise_on_error and response.status_code >= 300:
            self.logging.error("%s %s failed with status %d: %s", method, response.request.url, response.status_code, response.text)
            response.raise_for_status()
        return response
