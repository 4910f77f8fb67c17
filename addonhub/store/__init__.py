"""Persistence for add-on records."""

from addonhub.store.records import AddonRecordStore

__all__ = ["AddonRecordStore"]
