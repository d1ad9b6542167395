"""Core primitives: errors, value types, events, cache, document schema."""
