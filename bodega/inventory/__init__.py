"""
Module 'inventory' (feature-first): catalogue Stripe (vins, prix, SKU),
calcul du total panier, mise à jour du stock et options de livraison.
"""
