from typing import Protocol

from domain.models.currency import CurrencyCode, RateSnapshot, SupportedCurrency


class ExchangeRateProvider(Protocol):
	@property
	def name(self) -> str: ...

	async def fetch_rates(self, code: CurrencyCode) -> RateSnapshot: ...

	async def fetch_supported_currencies(self) -> list[SupportedCurrency]: ...

	async def close(self) -> None: ...
