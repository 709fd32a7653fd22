"""Rotas HTTP do Lemon Squeezy."""
