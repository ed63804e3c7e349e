"""Registration, login and bearer-token verification."""
