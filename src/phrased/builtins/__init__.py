"""The builtin assertion catalog, grouped into named collections."""

from . import async_iterable, async_parametric, sync_basic, sync_collection, sync_iterable, sync_parametric


COLLECTIONS = {
    "sync-basic": tuple(sync_basic.ASSERTIONS),
    "sync-parametric": tuple(sync_parametric.ASSERTIONS),
    "sync-collection": tuple(sync_collection.ASSERTIONS),
    "sync-iterable": tuple(sync_iterable.ASSERTIONS),
    "async-parametric": tuple(async_parametric.ASSERTIONS),
    "async-iterable": tuple(async_iterable.ASSERTIONS),
}

SYNC_ASSERTIONS = (
    COLLECTIONS["sync-basic"]
    + COLLECTIONS["sync-parametric"]
    + COLLECTIONS["sync-collection"]
    + COLLECTIONS["sync-iterable"]
)
ASYNC_ASSERTIONS = COLLECTIONS["async-parametric"] + COLLECTIONS["async-iterable"]
BUILTIN_ASSERTIONS = SYNC_ASSERTIONS + ASYNC_ASSERTIONS


__all__ = ["ASYNC_ASSERTIONS", "BUILTIN_ASSERTIONS", "COLLECTIONS", "SYNC_ASSERTIONS"]
