from .normalize import Series, normalize_series, normalize_series_group

__all__ = ["Series", "normalize_series", "normalize_series_group"]
