"""fakeme: a Slack participant that talks like a real person."""
