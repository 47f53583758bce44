"""
Explore catalog.

Responsibilities:
- Download drinks from TheCocktailDB, letter bucket by letter bucket.
- Normalise them into ``ExploreCocktail`` records with derived fields
  (base spirits, flavor profile, popularity, suggested type).
- Persist the catalog in a versioned envelope with a time-to-live.
- Serve the catalog from memory, the envelope, or a fresh download.
"""
