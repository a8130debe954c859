"""
Module 'payments' (feature-first): validation du panier contre le stock,
création et mise à jour des PaymentIntent Stripe, confirmation/annulation.
"""
