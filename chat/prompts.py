"""
Prompts for chat service.
"""

CHAT_SYSTEM_PROMPT = "You are a helpful assistant. Provide clear and concise answers."
