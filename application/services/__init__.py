from .rate_service import RateProvider

__all__ = ['RateProvider']
