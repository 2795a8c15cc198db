import httpx
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

class AviationStackClientError(Exception):
    """Custom exception for AviationStack client errors"""
    pass

class AviationStackClient:
    """
    A client for the AviationStack flights API.
    Handles all communication with the provider.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "http://api.aviationstack.com/v1/",
        timeout: int = 15,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the AviationStack client.

        Args:
            api_key: AviationStack access key (None leaves the client unconfigured)
            base_url: Base URL for the AviationStack API
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the provider
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _make_request(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make a GET request to the AviationStack API.

        Raises:
            AviationStackClientError: If the request fails or the payload is not usable
        """
        if not self.is_configured:
            raise AviationStackClientError("AviationStack API key not configured")

        url = f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        params = dict(params, access_key=self.api_key)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            error_msg = f"AviationStack API error ({e.response.status_code}): {e.response.text[:500]}"
            logger.error(error_msg)
            raise AviationStackClientError(error_msg)
        except Exception as e:
            error_msg = f"Error making request to AviationStack API: {str(e)}"
            logger.error(error_msg)
            raise AviationStackClientError(error_msg)

        if not isinstance(payload, dict):
            raise AviationStackClientError("Unexpected response format from AviationStack API")

        # The provider reports most failures (bad key, quota) with a 200 and an error object
        error = payload.get("error")
        if error:
            if isinstance(error, dict):
                info = error.get("info") or error.get("message")
            else:
                info = str(error)
            error_msg = f"AviationStack API error: {info or 'request failed'}"
            logger.error(error_msg)
            raise AviationStackClientError(error_msg)

        return payload

    async def get_flight(self, flight_iata: str) -> Optional[Dict[str, Any]]:
        """
        Get the latest record for one flight.

        Args:
            flight_iata: IATA flight number, e.g. "AA123"

        Returns:
            The raw flight record, or None when the provider has none

        Raises:
            AviationStackClientError: If the request fails
        """
        payload = await self._make_request(
            "flights",
            {"flight_iata": flight_iata, "limit": 1},
        )
        data = payload.get("data")
        if data is None:
            return None
        if not isinstance(data, list):
            raise AviationStackClientError("Unexpected response format from AviationStack API")
        if not data:
            return None
        if not isinstance(data[0], dict):
            raise AviationStackClientError("Unexpected flight record from AviationStack API")
        return data[0]
