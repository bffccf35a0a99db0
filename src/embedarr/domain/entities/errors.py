from __future__ import annotations


class EmbedarrError(Exception):
    """Base error for domain/usecases."""


class ServerNotFound(EmbedarrError):
    pass


class BuiltInServerReadOnly(EmbedarrError):
    pass


class WishlistItemNotFound(EmbedarrError):
    pass


class WishlistItemExists(EmbedarrError):
    pass


class RecordStoreError(EmbedarrError):
    """The record store could not be read or written, or holds corrupt data.

    Repositories raise this instead of treating the key as empty, so a
    failed read never turns into a write that drops existing records.
    """
