"""Order models, in-memory stores and buffers, shard routing, pipelines, logging, metrics and an HTTP cache server."""

__version__ = "0.1.0"