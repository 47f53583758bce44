"""
Cocktail classification layer.

Responsibilities:
- Detect base spirits from free-text ingredient names.
- Assign exactly one cocktail type per drink (name/category, ingredient
  combinations, then a heuristic ladder).
- Derive descriptive flavor tags and a metadata-based popularity score.
"""
