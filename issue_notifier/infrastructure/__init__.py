"""Infrastructure adapters: database, email, security and channels."""
