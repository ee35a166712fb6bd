import asyncio
import logging
from collections.abc import Callable

from config.logger import configure_logging
from config.settings import Settings, get_settings
from domain.exceptions.currency import ProviderError
from domain.models.currency import CurrencyCode, FetchResult, RateTable
from infrastructure.providers import CurrencyAPIProvider, ExchangeRateProvider

logger = logging.getLogger(__name__)

RatesListener = Callable[[RateTable], None]


class RateProvider:
	"""Publishes the latest rate table for the most recently requested currency.

	A fetch is issued only when the requested code changes. Each request is
	tagged with a sequence number and its response is applied only if no newer
	request was issued in the meantime, so a slow response for an earlier code
	never overwrites the table of a later one. Fetch failures are logged and
	recorded in ``last_result``; the previously published table stays in place.
	"""

	def __init__(self, provider: ExchangeRateProvider):
		self.provider = provider
		self.last_result: FetchResult | None = None
		self._rates: RateTable = {}
		self._current_code: CurrencyCode | None = None
		self._sequence = 0
		self._latest_task: asyncio.Task | None = None
		self._tasks: set[asyncio.Task] = set()
		self._listeners: list[RatesListener] = []

	@classmethod
	def from_settings(cls, settings: Settings | None = None) -> 'RateProvider':
		settings = settings or get_settings()
		configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
		return cls(
			CurrencyAPIProvider(base_url=settings.RATES_BASE_URL, timeout=settings.RATES_TIMEOUT)
		)

	@property
	def rates(self) -> RateTable:
		return dict(self._rates)

	@property
	def current_code(self) -> CurrencyCode | None:
		return self._current_code

	def subscribe(self, listener: RatesListener) -> Callable[[], None]:
		"""Call ``listener`` with every newly published table. Returns an unsubscribe callable."""
		self._listeners.append(listener)

		def unsubscribe() -> None:
			if listener in self._listeners:
				self._listeners.remove(listener)

		return unsubscribe

	def watch(self, code: CurrencyCode) -> asyncio.Task | None:
		"""Schedule a fetch for ``code`` on the running loop if it differs from the current code."""
		if code == self._current_code:
			return None

		self._current_code = code
		self._sequence += 1
		task = asyncio.create_task(self._fetch(code, self._sequence))
		self._tasks.add(task)
		task.add_done_callback(self._tasks.discard)
		self._latest_task = task
		return task

	async def get_rates(self, code: CurrencyCode) -> RateTable:
		"""Fetch rates for ``code`` if needed and return its table once the request settles.

		While ``code`` is still the current code this is the published table, which
		stays at the previous value when the fetch failed. If a newer code was
		requested in the meantime, the table fetched for ``code`` is returned
		unpublished, or an empty table if that fetch failed.
		"""
		task = self.watch(code) or self._latest_task
		result = await task
		if result.sequence == self._sequence:
			return self.rates
		return dict(result.rates or {})

	async def _fetch(self, code: CurrencyCode, sequence: int) -> FetchResult:
		try:
			snapshot = await self.provider.fetch_rates(code)
		except ProviderError as e:
			logger.warning(f'Rate fetch for {code!r} via {self.provider.name} failed: {e}')
			result = FetchResult(code=code, sequence=sequence, error=e.reason, message=str(e))
		else:
			result = FetchResult(
				code=code, sequence=sequence, rates=snapshot.rates, date=snapshot.date
			)

		if sequence != self._sequence:
			logger.debug(
				f'Discarding stale rates for {code!r} (request {sequence}, latest {self._sequence})'
			)
			return result

		self.last_result = result
		if result.rates is not None:
			self._publish(result.rates)
		return result

	def _publish(self, rates: RateTable) -> None:
		self._rates = dict(rates)
		logger.debug(f'Published {len(rates)} rates for {self._current_code!r}')
		for listener in list(self._listeners):
			try:
				listener(self.rates)
			except Exception:
				logger.exception(f'Rates listener {listener!r} failed')

	async def aclose(self) -> None:
		"""Wait for outstanding fetches, then release the HTTP client."""
		if self._tasks:
			await asyncio.gather(*self._tasks)
		await self.provider.close()

	async def __aenter__(self) -> 'RateProvider':
		return self

	async def __aexit__(self, exc_type, exc, tb) -> None:
		await self.aclose()
