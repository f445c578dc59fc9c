"""Annotated decoder for raw Bitcoin transactions."""

from .decoder import decode, decode_transaction  # noqa: F401

__version__ = "0.1.0"
