"""Business logic services package.

Contains the recommendation API client, in-memory per-chat caches for
conversation history and recently shown cards, and the persisted
favorites/feedback store.
"""
