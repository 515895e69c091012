from .normalize import coerce_entries

__all__ = ["coerce_entries"]
