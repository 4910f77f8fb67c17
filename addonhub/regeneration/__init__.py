"""Add-on metadata regeneration."""

from addonhub.regeneration.engine import RegenerationEngine, RegenerationResult, calculate_md5, select_screenshots

__all__ = ["RegenerationEngine", "RegenerationResult", "calculate_md5", "select_screenshots"]
