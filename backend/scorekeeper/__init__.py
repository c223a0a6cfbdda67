"""Tennis match scoring engine."""
