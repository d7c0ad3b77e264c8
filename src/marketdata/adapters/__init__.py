"""
============================

Market Data Provider Adapters.

============================

This package contains adapter implementations for upstream market data APIs.
Adapters translate provider-specific response shapes into the canonical
models and implement the protocol interfaces defined in the protocols package.

"""
