"""Configuration for Active Recap."""
