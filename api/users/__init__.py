"""Account profile and deletion."""
