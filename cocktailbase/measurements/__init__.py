"""
Measurement conversion.

Responsibilities:
- Parse free-text quantities (decimals, a/b fractions, unicode fractions,
  mixed numbers) in front of an ml / cl / oz unit.
- Re-render them in the user's preferred unit system.
- Leave anything unparseable untouched.
"""
