from datetime import timedelta

from oxr_rates.services.rates.staleness import is_stale

from conftest import DOCUMENT_TIME

T = DOCUMENT_TIME
D = timedelta(hours=1)


def test_without_max_age_never_stale():
    assert is_stale(T, None, T + timedelta(days=365)) is False
    assert is_stale(None, None, T) is False


def test_never_loaded_is_stale():
    assert is_stale(None, D, T) is True


def test_boundary():
    assert is_stale(T, D, T + D - timedelta(seconds=1)) is False
    assert is_stale(T, D, T + D) is False
    assert is_stale(T, D, T + D + timedelta(seconds=1)) is True
