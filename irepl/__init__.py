"""Incremental Rust evaluation through a scratch cargo project, with line-editor pieces and hook scripts."""

__version__ = "0.1.0"