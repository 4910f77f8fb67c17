"""Conversion of add-on records into descriptors."""

from addonhub.conversion.converter import AddonConverter, infer_addon_type, parse_dependency_id, parse_info

__all__ = ["AddonConverter", "infer_addon_type", "parse_dependency_id", "parse_info"]
