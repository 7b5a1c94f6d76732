"""Extract C4 architecture records, pattern evidence and fitness checks from annotated Rust source trees."""

__version__ = "0.3.0"