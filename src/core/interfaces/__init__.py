"""Core interfaces and abstractions.

Why:
- Defines the contracts (Protocol) that concrete adapters implement.
- The pipeline depends on these abstractions, never on httpx directly.
"""
