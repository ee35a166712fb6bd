from .base import ExchangeRateProvider
from .currencyapi import CurrencyAPIProvider

__all__ = ['ExchangeRateProvider', 'CurrencyAPIProvider']
