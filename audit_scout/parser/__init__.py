"""audit_scout.parser: pure HTML-to-signal extraction helpers."""
