"""
Team roster.

Responsibilities:
- Keep the team's members with their role (admin or user).
- Add members by e-mail, updating the role when the address is already known.
- Make sure the configured team owner is always present as an admin.
"""
