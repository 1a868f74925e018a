"""Credit Card Advisor Bot Application Package.

A Telegram bot that forwards user messages to a credit card recommendation
API and renders the structured reply (text, card listings, inline actions)
back into the chat. Users can save cards to favorites and leave like/dislike
feedback through inline buttons.

The application follows a modular architecture with separate concerns for:
- Bot handlers, callback routing and response formatting
- Resilient access to the recommendation API
- Conversation history and recently shown cards
- Persisted favorites and feedback tallies
"""
