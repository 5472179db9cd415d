"""Infrastructure: logging, ids, cache backends, storage, telemetry."""
