"""Sample-by-sample audio building blocks: filters, envelopes, effects, a compressor and drum voices."""

__version__ = "0.1.0"