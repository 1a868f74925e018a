"""Telegram bot implementation package.

Contains all Telegram bot specific functionality including command and
message handlers, inline button callback routing, and message templates.
Handles rendering of recommendation replies and favorites lists.
"""
