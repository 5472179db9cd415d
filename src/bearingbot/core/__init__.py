"""Conversation orchestration core."""
