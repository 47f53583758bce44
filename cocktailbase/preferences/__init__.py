"""
User preferences.

Responsibilities:
- Persist the unit system and interface language between runs.
- Fall back to defaults when the stored file is missing or invalid.
"""
