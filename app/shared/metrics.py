"""
Prometheus metrics.

Counters for outbound price-provider traffic and settled trades,
exposed by the ASGI app mounted at /metrics.
"""

from prometheus_client import Counter, make_asgi_app

upstream_requests_total = Counter(
    "cryptosim_upstream_requests_total",
    "Outbound price provider attempts",
    ["endpoint"],
)

upstream_failures_total = Counter(
    "cryptosim_upstream_failures_total",
    "Failed outbound price provider attempts",
    ["endpoint"],
)

trades_settled_total = Counter(
    "cryptosim_trades_settled_total",
    "Buys committed to the ledger",
    ["asset"],
)


def record_upstream_attempt(endpoint: str, succeeded: bool) -> None:
    """Count one upstream attempt, and its failure if it failed."""
    upstream_requests_total.labels(endpoint=endpoint).inc()
    if not succeeded:
        upstream_failures_total.labels(endpoint=endpoint).inc()


def record_settled_trade(asset: str) -> None:
    trades_settled_total.labels(asset=asset).inc()


def build_metrics_app():
    """ASGI app serving the default registry in the Prometheus text format."""
    return make_asgi_app()
