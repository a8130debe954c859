"""Module 'customers': enregistrement des clients côté Stripe (aucune persistance locale)."""
