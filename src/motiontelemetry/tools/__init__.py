"""Developer tools: debug timing and the bridge message replay CLI."""
