"""Authentication and authorization.

Learn: Users authenticate with email/password and receive a stateless
JWT bearer token valid for 7 days. Protected routes resolve that token
to a "current identity" via the get_current_user dependency.
"""
