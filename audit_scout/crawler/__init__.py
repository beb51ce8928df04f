"""audit_scout.crawler: guarded fetching, link discovery and the BFS scheduler."""
