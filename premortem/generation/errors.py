from __future__ import annotations


class GenerationFailure(RuntimeError):
    """The upstream document could not be produced or did not match the schema."""
