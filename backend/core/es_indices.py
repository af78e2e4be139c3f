"""Elasticsearch index mappings for watch state, alerts, evidence, events and settings."""

MARKET_WATCH_MAPPING = {
    "mappings": {
        "properties": {
            "slug": {"type": "keyword"},
            "question": {
                "type": "text",
                "fields": {"keyword": {"type": "keyword", "ignore_above": 512}},
            },
            "last_resolution_source": {"type": "keyword"},
            "last_active": {"type": "integer"},
            "last_closed": {"type": "integer"},
            "last_updated_at": {"type": "keyword"},
            "last_checked": {"type": "date", "format": "epoch_millis"},
            "last_market_json": {"type": "text", "index": False},
        }
    },
}

ALERTS_MAPPING = {
    "mappings": {
        "properties": {
            "id": {"type": "keyword"},              # time-ordered, see utils.dedup
            "slug": {"type": "keyword"},
            "kind": {"type": "keyword"},
            "old_value": {"type": "text", "index": False},
            "new_value": {"type": "text", "index": False},
            "created_at": {"type": "date", "format": "epoch_millis"},
        }
    },
}

EVIDENCE_MAPPING = {
    "mappings": {
        "properties": {
            "id": {"type": "keyword"},
            "slug": {"type": "keyword"},
            "question": {"type": "text"},
            "resolution_source": {"type": "keyword"},
            "resolution_url": {"type": "keyword"},
            "manual_evidence_url": {"type": "keyword"},
            "notes": {"type": "text"},
            "market_json": {"type": "text", "index": False},
            "resolution_html": {"type": "text", "index": False},
            "created_at": {"type": "date", "format": "epoch_millis"},
        }
    },
}

EVENTS_MAPPING = {
    "mappings": {
        "properties": {
            "event": {"type": "keyword"},           # impression or click
            "slug": {"type": "keyword"},
            "question": {"type": "keyword", "ignore_above": 512},
            "pub": {"type": "keyword"},
            "article": {"type": "keyword"},
            "page_url": {"type": "keyword"},
            "referrer": {"type": "keyword"},
            "ts": {"type": "date", "format": "epoch_millis"},
        }
    },
}

TRACKED_SLUGS_MAPPING = {
    "mappings": {
        "properties": {
            "slug": {"type": "keyword"},
            "is_tracked": {"type": "boolean"},
            "notes": {"type": "text"},
            "created_at_utc": {"type": "date"},
            "updated_at_utc": {"type": "date"},
        }
    },
}

SETTINGS_MAPPING = {
    "mappings": {
        "properties": {
            "watch_enabled": {"type": "boolean"},
            "watch_interval_minutes": {"type": "integer"},
            "cron_expression": {"type": "keyword"},
            "price_jump_threshold": {"type": "double"},
            "max_slugs": {"type": "integer"},
            "updated_at_utc": {"type": "date"},
        }
    },
}

ALL_INDICES = {
    "market_watch": MARKET_WATCH_MAPPING,
    "alerts": ALERTS_MAPPING,
    "evidence": EVIDENCE_MAPPING,
    "events": EVENTS_MAPPING,
    "tracked_slugs": TRACKED_SLUGS_MAPPING,
    "settings": SETTINGS_MAPPING,
}
