"""
Data models and ingestion helpers.

Candles, quotes and journal positions as consumed by the analysis core,
plus parsers and integrity checks for provider payloads.
"""
