from prometheus_client import Counter

PROVIDER_REQUESTS = Counter(
    "aggregator_provider_requests_total",
    "Upstream provider calls by outcome",
    ["provider", "outcome"],
)

ARTICLES_DROPPED = Counter(
    "aggregator_articles_dropped_total",
    "Upstream records rejected by the batch filter",
    ["reason"],
)

ARTICLES_SERVED = Counter(
    "aggregator_articles_served_total",
    "Normalized articles returned to callers",
    ["operation"],
)
