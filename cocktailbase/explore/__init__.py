"""
Explore ranking engine.

Responsibilities:
- Hold the per-session filter state (search, alcohol, spirits, categories,
  glasses, flavors, ingredient range, focus and sort modes).
- Build a user profile from the team's saved recipes.
- Filter the catalog, score each candidate against the profile and sort.
- Recompute on input changes, debouncing search-text edits.
"""
