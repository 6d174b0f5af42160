"""Conversation module."""

from .agent import ConversationAgent, IConversationAgent

__all__ = ["ConversationAgent", "IConversationAgent"]
