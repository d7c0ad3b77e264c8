"""
Alpaca response shape resolution.

Alpaca wraps the same entities differently per endpoint: historical bars come
either as a bare array or keyed by symbol, single snapshots come either bare
or keyed by symbol, crypto snapshots sit one level down under "snapshots".
This module holds exactly one decoding function per endpoint. Each one
classifies the payload, picks the entities for the requested symbol(s), and
hands them to the field mappers in data.py.

Absence rules differ by endpoint and are deliberate:
- Historical bars: no data is an empty result
- Single latest bar / quote / snapshot: no data is NotFoundError
- Bulk lookups: symbols without data are left out of the result

Payloads that fit no known shape raise ResponseShapeError rather than
surfacing as a KeyError or AttributeError deep inside a mapper.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.marketdata.adapters.alpaca.data import (
    SNAPSHOT_WIRE_FIELDS,
    AlpacaBar,
    AlpacaQuote,
    AlpacaSnapshot,
)
from src.marketdata.enums import Endpoint, Provider
from src.marketdata.exceptions import NotFoundError, ResponseShapeError
from src.marketdata.model.bar import Bar
from src.marketdata.model.params import BarsPage
from src.marketdata.model.quote import Quote
from src.marketdata.model.snapshot import Snapshot

logger = logging.getLogger(__name__)

PROVIDER = Provider.ALPACA.value

WireModel = TypeVar("WireModel", bound=BaseModel)
Result = TypeVar("Result")


# =============================================================================
# HELPERS
# =============================================================================


def _shape_error(endpoint: Endpoint, detail: str) -> ResponseShapeError:
    return ResponseShapeError(
        f"Unexpected {endpoint.value} response shape: {detail}",
        endpoint=endpoint.value,
        provider=PROVIDER,
    )


def _describe(value: Any) -> str:
    """Name the JSON type of a value for error messages."""
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case list():
            return "array"
        case dict():
            return "object"
        case _:
            return type(value).__name__


def _parse(
    model: type[WireModel], raw: Any, endpoint: Endpoint, symbol: str
) -> WireModel:
    """Validate one raw entity, reporting failures as shape errors."""
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise ResponseShapeError(
            f"Malformed {model.__name__} for {symbol} in {endpoint.value} "
            f"response ({e.error_count()} validation errors)",
            endpoint=endpoint.value,
            provider=PROVIDER,
        ) from e


def _require_object(payload: Any, endpoint: Endpoint) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise _shape_error(endpoint, f"expected object, got {_describe(payload)}")
    return payload


def _keyed_entities(
    payload: Any, key: str | None, endpoint: Endpoint
) -> dict[str, Any]:
    """
    Get the {symbol: entity} map of a response.

    With key=None the payload itself is the map. A null payload, a missing or
    null container, or an empty array container is an empty map.
    """
    if payload is None:
        return {}
    container = _require_object(payload, endpoint)
    if key is not None:
        container = container.get(key)
        if container is None or container == []:
            return {}
    if not isinstance(container, dict):
        raise _shape_error(
            endpoint,
            f"expected {key or 'response'} to be an object keyed by symbol, "
            f"got {_describe(container)}",
        )
    return container


def _unique(symbols: Iterable[str]) -> list[str]:
    """Drop duplicate symbols, keeping request order."""
    return list(dict.fromkeys(symbols))


def _collect(
    entities: Mapping[str, Any],
    symbols: Iterable[str],
    endpoint: Endpoint,
    convert: Callable[[str, Any], Result],
) -> dict[str, Result]:
    """Map the requested symbols that have data; leave the rest out."""
    result: dict[str, Result] = {}
    missing: list[str] = []
    for symbol in _unique(symbols):
        raw = entities.get(symbol)
        if raw is None:
            missing.append(symbol)
            continue
        result[symbol] = convert(symbol, raw)
    if missing:
        logger.debug(
            "%s response had no data for %s", endpoint.value, ", ".join(missing)
        )
    return result


def _bar(endpoint: Endpoint) -> Callable[[str, Any], Bar]:
    return lambda symbol, raw: _parse(AlpacaBar, raw, endpoint, symbol).to_bar()


def _quote(endpoint: Endpoint) -> Callable[[str, Any], Quote]:
    return lambda symbol, raw: _parse(AlpacaQuote, raw, endpoint, symbol).to_quote(
        symbol
    )


def _snapshot(endpoint: Endpoint) -> Callable[[str, Any], Snapshot]:
    return lambda symbol, raw: _parse(
        AlpacaSnapshot, raw, endpoint, symbol
    ).to_snapshot(symbol)


# =============================================================================
# BARS
# =============================================================================


def decode_bars(payload: Any, symbol: str) -> BarsPage:
    """
    Decode a historical bars response.

    Accepted shapes:
        {"bars": [bar, ...], "next_page_token": ...}
        {"bars": {"SYM": [bar, ...], ...}, "next_page_token": ...}

    Missing, null, empty-array and empty-object bars all decode to an empty
    page. From a keyed map only the requested symbol's entry is used.
    """
    if payload is None:
        return BarsPage()

    body = _require_object(payload, Endpoint.BARS)
    raw_bars = body.get("bars")

    match raw_bars:
        case None:
            entries: list[Any] = []
        case list():
            entries = raw_bars
        case dict():
            keyed = raw_bars.get(symbol)
            if keyed is None:
                entries = []
            elif isinstance(keyed, list):
                entries = keyed
            else:
                raise _shape_error(
                    Endpoint.BARS,
                    f"expected bars.{symbol} to be an array, got {_describe(keyed)}",
                )
        case _:
            raise _shape_error(
                Endpoint.BARS,
                f"expected bars to be an array or object, got {_describe(raw_bars)}",
            )

    convert = _bar(Endpoint.BARS)
    token = body.get("next_page_token")
    return BarsPage(
        bars=tuple(convert(symbol, raw) for raw in entries),
        next_page_token=token if isinstance(token, str) and token else None,
    )


def decode_latest_bar(payload: Any, symbol: str) -> Bar:
    """Decode {"bars": {"SYM": bar}}; a missing symbol is NotFoundError."""
    raw = _keyed_entities(payload, "bars", Endpoint.LATEST_BAR).get(symbol)
    if raw is None:
        raise NotFoundError(
            f"No bar data for {symbol}", symbol=symbol, provider=PROVIDER
        )
    return _bar(Endpoint.LATEST_BAR)(symbol, raw)


def decode_latest_bars(payload: Any, symbols: Iterable[str]) -> dict[str, Bar]:
    """Decode {"bars": {"SYM": bar, ...}}; missing symbols are omitted."""
    entities = _keyed_entities(payload, "bars", Endpoint.LATEST_BARS)
    return _collect(entities, symbols, Endpoint.LATEST_BARS, _bar(Endpoint.LATEST_BARS))


# =============================================================================
# QUOTES
# =============================================================================


def decode_latest_quote(payload: Any, symbol: str) -> Quote:
    """Decode {"quotes": {"SYM": quote}}; a missing symbol is NotFoundError."""
    raw = _keyed_entities(payload, "quotes", Endpoint.LATEST_QUOTE).get(symbol)
    if raw is None:
        raise NotFoundError(
            f"No quote data for {symbol}", symbol=symbol, provider=PROVIDER
        )
    return _quote(Endpoint.LATEST_QUOTE)(symbol, raw)


def decode_latest_quotes(payload: Any, symbols: Iterable[str]) -> dict[str, Quote]:
    """Decode {"quotes": {"SYM": quote, ...}}; missing symbols are omitted."""
    entities = _keyed_entities(payload, "quotes", Endpoint.LATEST_QUOTES)
    return _collect(
        entities, symbols, Endpoint.LATEST_QUOTES, _quote(Endpoint.LATEST_QUOTES)
    )


# =============================================================================
# SNAPSHOTS
# =============================================================================


def is_bare_snapshot(body: Mapping[str, Any]) -> bool:
    """
    Check if an object is a snapshot itself rather than a symbol map.

    Snapshot payloads carry no type discriminant, so this looks for the
    snapshot's own sub-fields (latestTrade, latestQuote, minuteBar, ...).
    """
    return not SNAPSHOT_WIRE_FIELDS.isdisjoint(body.keys())


def decode_snapshot(payload: Any, symbol: str) -> Snapshot:
    """
    Decode an equities single-symbol snapshot response.

    Accepted shapes, tried in order:
        {"latestTrade": ..., "latestQuote": ..., ...}
        {"SYM": {"latestTrade": ..., ...}}

    Raises NotFoundError when neither yields data; outside market hours this
    is the usual cause.
    """
    not_found = NotFoundError(
        f"No snapshot data for {symbol} (market may be closed)",
        symbol=symbol,
        provider=PROVIDER,
    )
    if not payload:
        raise not_found

    body = _require_object(payload, Endpoint.SNAPSHOT)
    if is_bare_snapshot(body):
        raw: Any = body
    else:
        raw = body.get(symbol)
        if raw is None:
            raise not_found
    return _snapshot(Endpoint.SNAPSHOT)(symbol, raw)


def decode_crypto_snapshot(payload: Any, symbol: str) -> Snapshot:
    """
    Decode a crypto snapshot response.

    Only {"snapshots": {"SYM": snapshot}} is accepted; top-level snapshot
    fields are never read.
    """
    raw = _keyed_entities(payload, "snapshots", Endpoint.CRYPTO_SNAPSHOT).get(symbol)
    if raw is None:
        raise NotFoundError(
            f"No crypto snapshot data for {symbol}", symbol=symbol, provider=PROVIDER
        )
    return _snapshot(Endpoint.CRYPTO_SNAPSHOT)(symbol, raw)


def decode_snapshots(payload: Any, symbols: Iterable[str]) -> dict[str, Snapshot]:
    """Decode {"SYM": snapshot, ...}; missing symbols are omitted."""
    entities = _keyed_entities(payload, None, Endpoint.SNAPSHOTS)
    return _collect(
        entities, symbols, Endpoint.SNAPSHOTS, _snapshot(Endpoint.SNAPSHOTS)
    )
