"""Infrastructure layer - database, identity provider, HTTP middleware, telemetry."""
