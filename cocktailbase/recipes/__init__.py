"""
Saved house cocktails.

Responsibilities:
- Keep the team's own cocktail recipes (create, read, update, delete, search).
- Copy Explore cocktails into the team's recipes, refusing duplicate names.
- Supply the saved recipes from which the Explore user profile is built.
"""
