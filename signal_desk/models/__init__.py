"""
Data models and contracts module.

Immutable data structures for indicator output, signals, trade plans and
exit verdicts. Follows functional programming principles with frozen
dataclasses.
"""
