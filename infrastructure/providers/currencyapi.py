import logging
from typing import Any

import httpx
from pydantic import FiniteFloat, TypeAdapter, ValidationError

from domain.exceptions.currency import MissingFieldError, NetworkFailure, ParseFailure
from domain.models.currency import CurrencyCode, RateSnapshot, SupportedCurrency

logger = logging.getLogger(__name__)

_rate_table = TypeAdapter(dict[str, FiniteFloat])


class CurrencyAPIProvider:
	"""Client for the free currency-api dataset served from jsDelivr.

	``GET {BASE_URL}/{code}.json`` returns ``{"date": ..., "<code>": {...}}``
	where the nested object maps counter currencies to rates for one unit of
	``code``. Codes are templated into the URL as given.
	"""

	BASE_URL = 'https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies'

	def __init__(
		self,
		base_url: str | None = None,
		client: httpx.AsyncClient | None = None,
		timeout: float = 10,
	):
		self.base_url = (base_url or self.BASE_URL).rstrip('/')
		self._owns_client = client is None
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return 'currency-api'

	def build_url(self, code: CurrencyCode) -> str:
		return f'{self.base_url}/{code}.json'

	async def _request(self, url: str, code: CurrencyCode | None = None) -> dict[str, Any]:
		try:
			httpx.URL(url)
			response = await self._client.get(url)
			response.raise_for_status()
		except httpx.InvalidURL as e:
			raise NetworkFailure(f'currency-api request failed: invalid URL ({e})', code) from e
		except httpx.HTTPStatusError as e:
			raise NetworkFailure(
				f'currency-api HTTP error {e.response.status_code}: {e.response.text[:200]}',
				code,
			) from e
		except httpx.RequestError as e:
			raise NetworkFailure(f'currency-api request failed: {e.__class__.__name__}', code) from e

		try:
			data = response.json()
		except ValueError as e:
			raise ParseFailure(f'currency-api response parsing error: {e}', code) from e

		if not isinstance(data, dict):
			raise ParseFailure(
				f'currency-api response parsing error: expected an object, got {type(data).__name__}',
				code,
			)
		return data

	async def fetch_rates(self, code: CurrencyCode) -> RateSnapshot:
		data = await self._request(self.build_url(code), code)

		if code not in data:
			raise MissingFieldError(f'Rates for {code!r} not found in currency-api response', code)

		try:
			rates = _rate_table.validate_python(data[code], strict=True)
		except ValidationError as e:
			raise ParseFailure(
				f'currency-api response parsing error: invalid rate table for {code!r} '
				f'({e.error_count()} errors)',
				code,
			) from e

		logger.debug(f'Fetched {len(rates)} rates for {code!r} from {self.name}')
		return RateSnapshot(code=code, rates=rates, date=data.get('date'))

	async def fetch_supported_currencies(self) -> list[SupportedCurrency]:
		data = await self._request(f'{self.base_url}.json')
		return [
			SupportedCurrency(code=code, name=name or None)
			for code, name in data.items()
		]

	async def close(self) -> None:
		if self._owns_client:
			await self._client.aclose()
