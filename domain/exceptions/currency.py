from domain.models.currency import FailureReason


class CurrencyException(Exception):
	pass


class ProviderError(CurrencyException):
	"""Raised when the rates endpoint cannot produce a rate table."""

	reason = FailureReason.NETWORK

	def __init__(self, message: str, code: str | None = None):
		super().__init__(message)
		self.code = code


class NetworkFailure(ProviderError):
	reason = FailureReason.NETWORK


class ParseFailure(ProviderError):
	reason = FailureReason.PARSE


class MissingFieldError(ProviderError):
	reason = FailureReason.MISSING_FIELD
