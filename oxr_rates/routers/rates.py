from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from oxr_rates.models.rates import ConversionOut, RateQuote, RatesListing, RatesStatus
from oxr_rates.services.money import decimal_to_str
from oxr_rates.services.rates.conversion import convert_amount
from oxr_rates.services.rates.store import RatesStore

"""Rates router.

Endpoints:
    - GET  /rates/status          -> load state of the store
    - GET  /rates                 -> every stored pair (base + derived)
    - GET  /rates/convert         -> convert an amount between currencies
    - GET  /rates/{from}/{to}     -> single rate
    - POST /rates/refresh         -> force a reload from the remote source

Rates are serialized as strings to keep every decimal digit.
"""

router = APIRouter(prefix="/rates", tags=["rates"])


def get_store(request: Request) -> RatesStore:
    return request.app.state.rates_store


def require_remote_enabled(store: RatesStore = Depends(get_store)) -> RatesStore:
    if not store.remote_enabled:
        raise HTTPException(status_code=409, detail="remote refresh not configured")
    return store


def _status(store: RatesStore) -> RatesStatus:
    cache_path = store.config.cache_path
    return RatesStatus(
        base=store.source,
        loaded=store.loaded,
        stale=store.stale(),
        last_updated_at=store.last_updated_at,
        pairs=len(store),
        remote_enabled=store.remote_enabled,
        cache_path=str(cache_path) if cache_path else None,
    )


@router.get("/status", summary="Rate table load state", response_model=RatesStatus)
async def rates_status(store: RatesStore = Depends(get_store)) -> RatesStatus:
    return _status(store)


@router.get("", summary="List stored rates", response_model=RatesListing)
def list_rates(store: RatesStore = Depends(get_store)) -> RatesListing:
    store.load()
    quotes = [
        RateQuote(from_currency=f, to_currency=t, rate=decimal_to_str(r))
        for f, t, r in sorted(store.each_rate())
    ]
    return RatesListing(
        base=store.source, last_updated_at=store.last_updated_at, rates=quotes
    )


@router.get("/convert", summary="Convert an amount", response_model=ConversionOut)
def convert(
    amount: Decimal = Query(..., description="Amount in the from currency"),
    from_currency: str = Query(..., alias="from", min_length=1),
    to_currency: str = Query(..., alias="to", min_length=1),
    store: RatesStore = Depends(get_store),
) -> ConversionOut:
    if not amount.is_finite():
        raise HTTPException(status_code=400, detail="amount must be a finite number")
    result = convert_amount(amount, from_currency.upper(), to_currency.upper(), store)
    return ConversionOut(
        amount=decimal_to_str(result.amount),
        from_currency=result.from_currency,
        to_currency=result.to_currency,
        rate=decimal_to_str(result.rate),
        converted=decimal_to_str(result.converted),
    )


@router.get(
    "/{from_currency}/{to_currency}",
    summary="Rate for one currency pair",
    response_model=RateQuote,
)
def get_rate(
    from_currency: str, to_currency: str, store: RatesStore = Depends(get_store)
) -> RateQuote:
    from_currency, to_currency = from_currency.upper(), to_currency.upper()
    rate = store.get_rate(from_currency, to_currency)
    return RateQuote(
        from_currency=from_currency, to_currency=to_currency, rate=decimal_to_str(rate)
    )


@router.post("/refresh", summary="Reload rates from the remote source")
def refresh(store: RatesStore = Depends(require_remote_enabled)):
    store.refresh()
    return {"status": "ok", "rates": _status(store).model_dump(mode="json")}
