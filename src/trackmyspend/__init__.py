"""TrackMySpend — personal finance tracking backend.

User accounts and authentication for the TrackMySpend app: registration,
login with bearer tokens, password changes, and account deletion that
cascades to the user's transactions, budgets, and reminders.
"""

__version__ = "0.1.0"
