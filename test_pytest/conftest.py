import numpy as np
import pandas as pd
import pytest

REFERENCE_SERIES = [
    5.0, 9.0, 2.0, 9.0, 0.0, 6.0, 3.0, 8.0, 5.0, 8.0,
    7.0, 8.0, 8.0, 0.0, 2.0, 5.0, 0.0, 5.0, 6.0, 7.0,
    3.0, 6.0, 1.0, 4.0, 4.0, 4.0, 3.0, 7.0, 5.0, 8.0,
]


@pytest.fixture
def reference_series():
    return list(REFERENCE_SERIES)


@pytest.fixture
def monthly_series():
    """24 months: yearly sine, linear trend and mild noise."""
    rng = np.random.default_rng(7)
    t = np.arange(24)
    return 10.0 * np.sin(2 * np.pi * t / 12) + 0.5 * t + rng.normal(0.0, 0.5, size=24)


@pytest.fixture
def long_monthly_series():
    """Ten years of monthly data with one large outlier."""
    rng = np.random.default_rng(0)
    t = np.arange(120)
    values = 5.0 * np.sin(2 * np.pi * t / 12) + 0.1 * t + rng.normal(0.0, 1.0, size=120)
    values[40] += 30.0
    return values


@pytest.fixture
def daily_series():
    """Two years of daily data with weekly and yearly seasonality."""
    rng = np.random.default_rng(42)
    t = np.arange(730)
    weekly = 5.0 * np.sin(2 * np.pi * t / 7)
    yearly = 20.0 * np.sin(2 * np.pi * t / 365)
    trend = 100.0 + 0.005 * t
    noise = rng.normal(0.0, 0.1, size=730)
    series = pd.Series(
        trend + weekly + yearly + noise,
        index=pd.date_range("2022-01-01", periods=730, freq="D"),
    )
    return series, weekly, yearly
