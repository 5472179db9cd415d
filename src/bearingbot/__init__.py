"""Conversational assistant over a bearing product catalog."""
