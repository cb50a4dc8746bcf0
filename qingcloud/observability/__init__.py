"""Observability: structured logging for the QingCloud SDK.

Logging is never configured implicitly; call `configure_logging` with the
level resolved by a Config to opt in.
"""
