"""HTTP transport for the conversation pipeline."""
