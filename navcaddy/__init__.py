"""Decision core for a conversational golf caddy."""
