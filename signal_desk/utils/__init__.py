"""
Utility functions module.

Time Semantics:
- Candle timestamps are epoch milliseconds and are never rewritten
- Wall-clock time is only a fallback when the caller passes no clock
- Signal timestamps use the evaluation clock for reproducibility in tests
"""
