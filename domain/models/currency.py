from dataclasses import dataclass
from enum import Enum

CurrencyCode = str
RateTable = dict[str, float]


class FailureReason(Enum):
	NETWORK = 'network'
	PARSE = 'parse'
	MISSING_FIELD = 'missing_field'


@dataclass(frozen=True)
class FetchResult:
	code: CurrencyCode
	sequence: int
	rates: RateTable | None = None
	date: str | None = None
	error: FailureReason | None = None
	message: str | None = None

	@property
	def is_successful(self) -> bool:
		return self.error is None


@dataclass(frozen=True)
class SupportedCurrency:
	code: str
	name: str | None


@dataclass(frozen=True)
class RateSnapshot:
	"""Rate table for one base currency as published by the provider."""

	code: CurrencyCode
	rates: RateTable
	date: str | None = None
