"""OAuth 1.0a and OAuth 2.0 authorization-flow engine."""
