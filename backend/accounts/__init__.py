# accounts/__init__.py
"""
Accounts app - authentication and authorization.

This app provides:
- JWT token endpoints (obtain, refresh, blacklist)
- ActorContext: Authorization context passed to commands
"""
