"""External integrations: Google OAuth and reset-link delivery."""
