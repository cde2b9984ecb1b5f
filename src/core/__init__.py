"""Core composition package for zulip-compose.

Core holds the fence, link, mention, and quote-and-reply logic without any
storage or network code, so every operation stays a pure function.
"""
