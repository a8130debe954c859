"""Adaptateurs vers les services externes (Stripe, Redis)."""
